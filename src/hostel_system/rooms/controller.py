from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import error_response
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/rooms", methods=["POST"], endpoint="create_room")
    def create_room():
        data = request.get_json(silent=True) or {}
        try:
            room = container.room_service.create_room(
                room_number=data.get("roomNumber"),
                floor=data.get("floor"),
                capacity=data.get("capacity"),
                block_key=data.get("blockKey"),
            )
        except Exception as e:
            return error_response(e, fallback="Error adding room")
        return jsonify({"success": True, "message": "Room added successfully!", "room": room.to_dict()}), 201

    @app.route("/api/rooms/<room_id>", methods=["DELETE"], endpoint="delete_room")
    def delete_room(room_id: str):
        try:
            container.room_service.delete_room(room_id)
        except Exception as e:
            return error_response(e, fallback="Error deleting room")
        return jsonify({"success": True, "message": "Room and associated students deleted successfully!"})
