from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.http import json_body, make_token_required
from ..common.validators import optional_id
from ..container import Container


def register(app: Flask, container: Container) -> None:
    token_required = make_token_required(container.auth_service.resolve_owner)

    @app.route("/api/students", methods=["GET"], endpoint="list_students")
    @token_required
    def list_students():
        students = container.student_service.list_students(
            g.owner_id,
            class_id=request.args.get("classId"),
            subject_id=request.args.get("subjectId"),
        )
        return jsonify([s.as_dict() for s in students])

    @app.route("/api/students", methods=["POST"], endpoint="create_student")
    @token_required
    def create_student():
        body = json_body()
        created = container.student_service.create_student(
            g.owner_id,
            name=body.get("name"),
            class_id=body.get("classId"),
        )
        return jsonify(created.as_dict()), 201

    @app.route("/api/students/<student_id>", methods=["DELETE"], endpoint="delete_student")
    @token_required
    def delete_student(student_id: str):
        subject_id = request.args.get("subjectId")
        class_id = request.args.get("classId")
        touched = container.student_service.remove(
            g.owner_id,
            student_id,
            subject_id=subject_id,
            class_id=class_id,
        )
        if optional_id(subject_id, "subjectId") is not None:
            message = "Student removed from subject attendance"
        else:
            message = "Student deleted"
        return jsonify({"message": message, "sessionsUpdated": touched})
