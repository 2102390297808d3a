from __future__ import annotations

import pytest

from hostel_system.blocks.service import BlockService
from hostel_system.core.exceptions import NotFoundError, ValidationError
from hostel_system.rooms.service import RoomService


@pytest.fixture
def block_service(blocks_repo, rooms_repo, students_repo):
    return BlockService(blocks_repo, rooms_repo, students_repo)


@pytest.fixture
def room_service(rooms_repo, blocks_repo):
    return RoomService(rooms_repo, blocks_repo)


def test_create_block_rejects_duplicate_key(block_service, seeded):
    with pytest.raises(ValidationError, match="Block key already exists!"):
        block_service.create_block(block_name="Block A2", unique_key="A", theme_color="#000")


def test_create_block_requires_all_fields(block_service):
    with pytest.raises(ValidationError, match="All fields are required"):
        block_service.create_block(block_name="B", unique_key="", theme_color="#000")


def test_list_blocks_nests_rooms_and_students_newest_first(block_service, seeded):
    block_service.create_block(block_name="Block B", unique_key="B", theme_color="#ff0000")

    blocks = block_service.list_blocks()

    assert [b["blockKey"] for b in blocks] == ["B", "A"]
    assert blocks[0]["rooms"] == []
    [room] = blocks[1]["rooms"]
    assert room["roomNumber"] == "101"
    assert [s["username"] for s in room["students"]] == ["asha"]
    assert "password_hash" not in room["students"][0]


def test_create_room_in_block(room_service, seeded, rooms_repo):
    room = room_service.create_room(room_number="102", floor="1", capacity="3", block_key="A")
    assert room.block_id == seeded.block_id
    assert room.capacity == 3
    assert rooms_repo.get_by_id(room.room_id) == room


def test_create_room_errors(room_service, seeded):
    with pytest.raises(ValidationError, match="Missing required fields."):
        room_service.create_room(room_number="102", floor="1", capacity=None, block_key="A")
    with pytest.raises(NotFoundError, match="Block not found."):
        room_service.create_room(room_number="102", floor="1", capacity=2, block_key="Z")
    with pytest.raises(ValidationError):
        room_service.create_room(room_number="102", floor="1", capacity="two", block_key="A")


def test_delete_room_cascades_students(room_service, seeded, rooms_repo, students_repo):
    room_service.delete_room(seeded.room_id)

    assert rooms_repo.get_by_id(seeded.room_id) is None
    assert students_repo.get_by_id(seeded.student_id) is None
    with pytest.raises(NotFoundError):
        room_service.delete_room(seeded.room_id)


def test_delete_block_cascades_rooms_and_students(block_service, seeded, blocks_repo, rooms_repo, students_repo):
    block_service.delete_block(seeded.block_id)

    assert blocks_repo.get_by_id(seeded.block_id) is None
    assert rooms_repo.get_by_id(seeded.room_id) is None
    assert students_repo.list_all_ids() == []


def test_delete_missing_block(block_service):
    with pytest.raises(NotFoundError):
        block_service.delete_block(77)


def test_blocks_and_rooms_api(client):
    resp = client.post("/api/blocks", json={"blockName": "Block C", "uniqueKey": "C", "themeColor": "#00ff00"})
    assert resp.status_code == 201
    block_id = resp.get_json()["block"]["id"]

    resp = client.post("/api/blocks", json={"blockName": "Again", "uniqueKey": "C", "themeColor": "#00ff00"})
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Block key already exists!"

    resp = client.post("/api/rooms", json={"roomNumber": "1", "floor": "G", "capacity": 2, "blockKey": "C"})
    assert resp.status_code == 201
    room_id = resp.get_json()["room"]["id"]

    assert client.post("/api/rooms", json={"roomNumber": "2"}).status_code == 400
    assert client.post(
        "/api/rooms", json={"roomNumber": "2", "floor": "G", "capacity": 2, "blockKey": "nope"}
    ).status_code == 404

    blocks = client.get("/api/blocks").get_json()["blocks"]
    assert blocks[0]["rooms"][0]["id"] == room_id

    assert client.delete(f"/api/rooms/{room_id}").status_code == 200
    assert client.delete(f"/api/blocks/{block_id}").status_code == 200
    assert client.delete(f"/api/blocks/{block_id}").status_code == 404
    assert client.get("/api/blocks").get_json()["blocks"] == []
