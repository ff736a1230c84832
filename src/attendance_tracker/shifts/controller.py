from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from .model import SHIFT_TIME_FIELDS


def register(app: Flask, container: Container) -> None:
    @app.route("/api/shifts", methods=["GET"], endpoint="list_shifts")
    def list_shifts():
        return jsonify([s.to_dict() for s in container.shift_service.list_shifts()])

    @app.route("/api/shifts", methods=["POST"], endpoint="create_shift")
    def create_shift():
        payload = request.get_json(silent=True) or {}
        shift_id = container.shift_service.create_shift(
            name=payload.get("shift_name"),
            base_times={f: payload.get(f) for f in SHIFT_TIME_FIELDS},
            grace_period=payload.get("grace_period_minutes"),
            weekdays=payload.get("weekdays"),
            patterns=payload.get("patterns"),
            actor=request.headers.get("X-Actor"),
        )
        return jsonify({"shift_id": shift_id}), 201

    @app.route("/api/shifts/<int:shift_id>", methods=["DELETE"], endpoint="delete_shift")
    def delete_shift(shift_id: int):
        container.shift_service.delete_shift(shift_id, actor=request.headers.get("X-Actor"))
        return jsonify({"success": True})
