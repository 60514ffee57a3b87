from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.http import json_body, make_token_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    token_required = make_token_required(container.auth_service.resolve_owner)

    @app.route("/api/subjects", methods=["GET"], endpoint="list_subjects")
    @token_required
    def list_subjects():
        return jsonify([s.as_dict() for s in container.subject_service.list_subjects(g.owner_id)])

    @app.route("/api/subjects", methods=["POST"], endpoint="create_subject")
    @token_required
    def create_subject():
        created = container.subject_service.create_subject(g.owner_id, name=json_body().get("name"))
        return jsonify(created.as_dict()), 201

    @app.route("/api/subjects/<subject_id>", methods=["GET"], endpoint="get_subject")
    @token_required
    def get_subject(subject_id: str):
        return jsonify(container.subject_service.get_subject(g.owner_id, subject_id).as_dict())

    @app.route("/api/subjects/<subject_id>", methods=["PUT"], endpoint="update_subject")
    @token_required
    def update_subject(subject_id: str):
        body = json_body()
        updated = container.subject_service.update_links(
            g.owner_id,
            subject_id,
            assigned_classes=body.get("assignedClasses"),
            excluded_students=body.get("excludedStudents"),
        )
        return jsonify(updated.as_dict())

    @app.route("/api/subjects/<subject_id>", methods=["DELETE"], endpoint="delete_subject")
    @token_required
    def delete_subject(subject_id: str):
        container.subject_service.delete_subject(g.owner_id, subject_id)
        return jsonify({"message": "Subject deleted"})
