from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_iso_date
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/log", methods=["POST"], endpoint="log_attendance")
    def log_attendance():
        payload = request.get_json(silent=True) or {}
        result = container.attendance_service.log_attendance(
            payload.get("employee_code"),
            payload.get("log_type"),
            now=now_local(),
            actor=request.headers.get("X-Actor"),
        )
        return jsonify(result.to_dict())

    @app.route("/api/attendance/scan", methods=["POST"], endpoint="face_scan")
    def face_scan():
        payload = request.get_json(silent=True) or {}
        metadata = {k: v for k, v in payload.items() if k != "employee_code"}
        result = container.attendance_service.auto_detect_punch(
            payload.get("employee_code"),
            now=now_local(),
            metadata=metadata,
        )
        return jsonify(result.to_dict())

    @app.route("/api/attendance/<int:employee_id>", methods=["GET"], endpoint="attendance_records")
    def attendance_records(employee_id: int):
        start = parse_iso_date(request.args.get("from"), field="from")
        end = parse_iso_date(request.args.get("to") or start, field="to")
        records = container.attendance_service.list_records(employee_id, start=start, end=end)
        return jsonify([r.to_dict() for r in records])

    @app.route("/api/attendance/<int:employee_id>/<work_date>/summary", methods=["GET"], endpoint="daily_summary")
    def daily_summary(employee_id: int, work_date: str):
        day = parse_iso_date(work_date, field="work_date")
        return jsonify(container.attendance_service.daily_summary(employee_id, day).to_dict())
