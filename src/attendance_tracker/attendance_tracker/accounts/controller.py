from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/register", methods=["POST"], endpoint="auth_register")
    def auth_register():
        body = json_body()
        container.auth_service.register(
            username=body.get("username"),
            login_id=body.get("userId"),
            password=body.get("password"),
        )
        return jsonify({"message": "User registered successfully"}), 201

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        body = json_body()
        result = container.auth_service.login(login_id=body.get("userId"), password=body.get("password"))
        return jsonify(
            {
                "message": "Login successful",
                "token": result.token,
                "user": {"username": result.username, "userId": result.login_id},
            }
        )
