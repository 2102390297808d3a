from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import error_response
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/students", methods=["POST"], endpoint="create_student")
    def create_student():
        data = request.get_json(silent=True) or {}
        try:
            student = container.student_service.create_student(data)
        except Exception as e:
            return error_response(e, fallback="Error adding student")
        return (
            jsonify({"success": True, "message": "Student added successfully!", "student": student.to_public_dict()}),
            201,
        )

    @app.route("/api/students/<student_id>", methods=["DELETE"], endpoint="delete_student")
    def delete_student(student_id: str):
        try:
            container.student_service.delete_student(student_id)
        except Exception as e:
            return error_response(e, fallback="Error removing student")
        return jsonify({"success": True, "message": "Student removed successfully!"})

    @app.route("/api/student/<student_id>", methods=["GET"], endpoint="student_profile")
    def student_profile(student_id: str):
        try:
            profile = container.student_service.get_profile(student_id)
        except Exception as e:
            return error_response(e, fallback="Error fetching student profile")
        return jsonify({"success": True, **profile})
