from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import to_iso_instant
from ..common.web import current_user_id, login_required
from ..container import Container
from .model import TrainingType


def _type_json(t: TrainingType) -> dict:
    return {
        "id": t.id,
        "name": t.name,
        "color": t.color,
        "icon": t.icon,
        "createdAt": to_iso_instant(t.created_at) if t.created_at else None,
    }


def register(app: Flask, container: Container) -> None:
    registry = container.training_type_registry

    @app.route("/api/training-types", methods=["GET"], endpoint="training_types_list")
    @login_required
    async def training_types_list():
        types = await registry.list_types(current_user_id())
        return jsonify([_type_json(t) for t in types])

    @app.route("/api/training-types", methods=["POST"], endpoint="training_types_create")
    @login_required
    async def training_types_create():
        data = request.get_json(silent=True) or {}
        type_id = await registry.create_type(
            current_user_id(),
            name=data.get("name") or "",
            color=data.get("color") or "",
            icon=data.get("icon"),
        )
        return jsonify({"id": type_id}), 201

    @app.route("/api/training-types/<type_id>", methods=["PATCH"], endpoint="training_types_update")
    @login_required
    async def training_types_update(type_id: str):
        data = request.get_json(silent=True) or {}
        updated = await registry.update_type(current_user_id(), type_id, data)
        return jsonify(_type_json(updated))

    @app.route("/api/training-types/<type_id>", methods=["DELETE"], endpoint="training_types_delete")
    @login_required
    async def training_types_delete(type_id: str):
        await registry.delete_type(current_user_id(), type_id)
        return "", 204
