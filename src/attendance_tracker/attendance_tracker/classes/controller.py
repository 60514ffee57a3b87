from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.http import json_body, make_token_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    token_required = make_token_required(container.auth_service.resolve_owner)

    @app.route("/api/classes", methods=["GET"], endpoint="list_classes")
    @token_required
    def list_classes():
        return jsonify([c.as_dict() for c in container.class_service.list_classes(g.owner_id)])

    @app.route("/api/classes", methods=["POST"], endpoint="create_class")
    @token_required
    def create_class():
        created = container.class_service.create_class(g.owner_id, name=json_body().get("name"))
        return jsonify(created.as_dict()), 201

    @app.route("/api/classes/<class_id>", methods=["DELETE"], endpoint="delete_class")
    @token_required
    def delete_class(class_id: str):
        container.class_service.delete_class(g.owner_id, class_id)
        return jsonify({"message": "Class deleted"})
