from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..core.exceptions import AuthenticationError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or request.form
        try:
            s_user = container.auth_service.authenticate(
                data.get("username", ""),
                data.get("password", ""),
                data.get("role", ""),
            )
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        except AuthenticationError as e:
            return jsonify({"message": str(e)}), 401
        except Exception:
            logger.exception("Login failed")
            return jsonify({"message": "Server error"}), 500

        session.clear()
        session["user_id"] = s_user.user_id
        session["role"] = s_user.role.value

        body = {"message": "Login successful", "redirect": s_user.redirect}
        if s_user.student_id is not None:
            body["studentId"] = s_user.student_id
        return jsonify(body)

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"message": "Logged out"})
