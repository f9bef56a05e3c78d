from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request

from ..common.web import current_user_id, login_required
from ..container import Container
from .model import AttendanceRecord


def _record_json(r: AttendanceRecord) -> dict:
    return r.to_document()


def register(app: Flask, container: Container) -> None:
    store = container.attendance_store

    @app.route("/api/attendance/<date>", methods=["PUT"], endpoint="attendance_mark")
    @login_required
    async def attendance_mark(date: str):
        data = request.get_json(silent=True) or {}
        await store.mark(
            current_user_id(),
            date,
            training_type_id=data.get("trainingTypeId"),
            notes=data.get("notes"),
        )
        return "", 204

    @app.route("/api/attendance/<date>", methods=["DELETE"], endpoint="attendance_remove")
    @login_required
    async def attendance_remove(date: str):
        await store.remove(current_user_id(), date)
        return "", 204

    @app.route("/api/attendance/<date>/toggle", methods=["POST"], endpoint="attendance_toggle")
    @login_required
    async def attendance_toggle(date: str):
        attended = await store.toggle(current_user_id(), date)
        return jsonify({"date": date, "attended": attended})

    @app.route("/api/attendance/<int:year>/<int:month>", methods=["GET"], endpoint="attendance_month")
    @login_required
    async def attendance_month(year: int, month: int):
        records = await store.get_month(current_user_id(), year, month)
        return jsonify([_record_json(r) for r in records])

    @app.route("/api/attendance/<int:year>", methods=["GET"], endpoint="attendance_year")
    @login_required
    async def attendance_year(year: int):
        records = await store.get_year(current_user_id(), year)
        return jsonify([_record_json(r) for r in records])

    @app.route("/api/attendance/<int:year>.csv", methods=["GET"], endpoint="attendance_year_csv")
    @login_required
    async def attendance_year_csv(year: int):
        user_id = current_user_id()
        records = await store.get_year(user_id, year)
        names = {t.id: t.name for t in await container.training_type_registry.list_types(user_id)}

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=["date", "training_type", "notes", "timestamp"])
        writer.writeheader()
        for r in records:
            writer.writerow(
                {
                    "date": r.date,
                    "training_type": names.get(r.training_type_id, "") if r.training_type_id else "",
                    "notes": r.notes or "",
                    "timestamp": r.to_document()["timestamp"],
                }
            )

        return app.response_class(
            out.getvalue().encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename=attendance_{year}.csv"},
        )

    @app.route("/api/backend", methods=["GET"], endpoint="backend_status")
    async def backend_status():
        return jsonify({"usingFallback": store.is_using_fallback(), "reason": container.decision.reason})
