from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import error_response
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/blocks", methods=["GET"], endpoint="list_blocks")
    def list_blocks():
        try:
            blocks = container.block_service.list_blocks()
        except Exception as e:
            return error_response(e)
        return jsonify({"success": True, "blocks": blocks})

    @app.route("/api/blocks", methods=["POST"], endpoint="create_block")
    def create_block():
        data = request.get_json(silent=True) or {}
        try:
            block = container.block_service.create_block(
                block_name=data.get("blockName"),
                unique_key=data.get("uniqueKey"),
                theme_color=data.get("themeColor"),
            )
        except Exception as e:
            return error_response(e)
        return jsonify({"success": True, "message": "Block added successfully!", "block": block.to_dict()}), 201

    @app.route("/api/blocks/<block_id>", methods=["DELETE"], endpoint="delete_block")
    def delete_block(block_id: str):
        try:
            container.block_service.delete_block(block_id)
        except Exception as e:
            return error_response(e, fallback="Error deleting block")
        return jsonify({"success": True, "message": "Block, rooms, and students deleted successfully!"})
