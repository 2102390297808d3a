from __future__ import annotations

from flask import Flask, jsonify, request, send_from_directory

from ..common.responses import error_response
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/activities", methods=["GET"], endpoint="list_activities")
    def list_activities():
        try:
            activities = container.activity_service.list_activities()
        except Exception as e:
            return error_response(e)
        return jsonify({"success": True, "activities": [a.to_dict() for a in activities]})

    @app.route("/api/activities", methods=["POST"], endpoint="create_activity")
    def create_activity():
        form = request.form
        try:
            activity = container.activity_service.create_activity(
                title=form.get("title"),
                activity_type=form.get("type"),
                activity_date=form.get("date"),
                description=form.get("description"),
                image=request.files.get("image"),
            )
        except Exception as e:
            return error_response(e)
        return (
            jsonify({"success": True, "message": "Activity added successfully!", "activity": activity.to_dict()}),
            201,
        )

    @app.route("/api/activities/<activity_id>", methods=["DELETE"], endpoint="delete_activity")
    def delete_activity(activity_id: str):
        try:
            container.activity_service.delete_activity(activity_id)
        except Exception as e:
            return error_response(e, fallback="Error deleting activity")
        return jsonify({"success": True, "message": "Activity deleted successfully!"})

    @app.route("/uploads/<path:filename>", methods=["GET"], endpoint="uploaded_file")
    def uploaded_file(filename: str):
        return send_from_directory(container.activity_service.upload_folder, filename)
