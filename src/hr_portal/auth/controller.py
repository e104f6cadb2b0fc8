from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import login_required, payload, pick
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = payload()
        user = container.auth_service.login(pick(data, "email", default=""), pick(data, "password", default=""))

        session.clear()
        session["user_id"] = user.user_id
        session["email"] = user.email
        session["role"] = user.role.value
        if user.token:
            session["token"] = user.token

        return jsonify({"success": True, "user": {"id": user.user_id, "email": user.email, "role": user.role.value}})

    @app.route("/logout", methods=["POST"], endpoint="logout")
    @login_required
    def logout():
        session.clear()
        return jsonify({"success": True})
