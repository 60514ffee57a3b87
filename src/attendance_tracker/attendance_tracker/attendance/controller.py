from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.http import json_body, make_token_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    token_required = make_token_required(container.auth_service.resolve_owner)

    @app.route("/api/attendance", methods=["POST"], endpoint="record_attendance")
    @token_required
    def record_attendance():
        body = json_body()
        saved = container.attendance_service.record_session(
            g.owner_id,
            class_id=body.get("classId"),
            subject_id=body.get("subjectId"),
            records=body.get("records"),
            session_date=body.get("date"),
        )
        return jsonify(saved.as_dict()), 201

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_overview")
    @token_required
    def attendance_overview():
        return jsonify(container.attendance_service.overview(g.owner_id))

    @app.route("/api/attendance/student-records", methods=["GET"], endpoint="student_records")
    @token_required
    def student_records():
        return jsonify(
            container.attendance_service.student_records(
                g.owner_id,
                class_id=request.args.get("classId"),
                subject_id=request.args.get("subjectId"),
            )
        )

    @app.route("/api/attendance/subject-records", methods=["GET"], endpoint="subject_records")
    @token_required
    def subject_records():
        return jsonify(
            container.attendance_service.subject_records(
                g.owner_id,
                class_id=request.args.get("classId"),
                subject_id=request.args.get("subjectId"),
            )
        )
