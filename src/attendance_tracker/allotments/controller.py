from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from .service import ALL_EMPLOYEES


def register(app: Flask, container: Container) -> None:
    @app.route("/api/shifts/<int:shift_id>/assign", methods=["POST"], endpoint="assign_shift")
    def assign_shift(shift_id: int):
        payload = request.get_json(silent=True) or {}
        employees = ALL_EMPLOYEES if payload.get("all_employees") else payload.get("employee_ids") or []

        assigned = container.allotment_service.assign_shift(
            shift_id=shift_id,
            employees=employees,
            effective_from=payload.get("effective_from"),
            effective_to=payload.get("effective_to"),
            actor=request.headers.get("X-Actor"),
        )
        return jsonify({"assigned": assigned})

    @app.route("/api/employees/<int:employee_id>/allotments", methods=["GET"], endpoint="employee_allotments")
    def employee_allotments(employee_id: int):
        return jsonify([a.to_dict() for a in container.allotment_service.list_for_employee(employee_id)])
