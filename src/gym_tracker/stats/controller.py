from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.web import current_user_id, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    stats = container.stats_service

    @app.route("/api/stats/<int:year>", methods=["GET"], endpoint="stats_year")
    @login_required
    async def stats_year(year: int):
        today = date.today()
        default_month = today.month if year == today.year else 1
        month = request.args.get("month", default=default_month, type=int)
        result = await stats.year_stats(current_user_id(), year, month)
        return jsonify(result.to_dict())

    @app.route("/api/calendar/<int:year>/<int:month>", methods=["GET"], endpoint="calendar_month")
    @login_required
    async def calendar_month(year: int, month: int):
        view = await stats.calendar_month(current_user_id(), year, month)
        return jsonify(view.to_dict())

    @app.route("/api/calendar/<int:year>", methods=["GET"], endpoint="calendar_year")
    @login_required
    async def calendar_year(year: int):
        grids = await stats.calendar_year(current_user_id(), year)
        return jsonify([g.to_dict() for g in grids])
