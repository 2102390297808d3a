from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta
from types import SimpleNamespace
from typing import Optional
from zoneinfo import ZoneInfo

import pytest
from werkzeug.security import generate_password_hash

from hostel_system.activities.model import ClubActivity
from hostel_system.attendance.model import AttendanceRecord
from hostel_system.blocks.model import Block
from hostel_system.container import assemble_container
from hostel_system.core.enums import AttendanceStatus, Role
from hostel_system.core.exceptions import ConflictError, StorageUnavailableError
from hostel_system.main import create_app
from hostel_system.rooms.model import Room
from hostel_system.students.model import NewStudent, Student
from hostel_system.users.model import User


@dataclass
class FakeClock:
    current: datetime
    timezone: str = "Asia/Kolkata"

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def now(self) -> datetime:
        return self.current

    def today(self) -> date:
        return self.current.date()

    def advance(self, **kwargs) -> None:
        self.current = self.current + timedelta(**kwargs)


class InMemoryAttendance:
    def __init__(self):
        self.by_student_date: dict[tuple[int, date], AttendanceRecord] = {}
        self.status_changes: list[dict] = []
        self.fail_audit = False
        self._id = 0

    def get_for_student_and_date(self, student_id: int, attendance_date: date) -> Optional[AttendanceRecord]:
        return self.by_student_date.get((student_id, attendance_date))

    def get_recent_for_student(self, student_id: int, limit: int):
        items = [r for r in self.by_student_date.values() if r.student_id == student_id]
        items.sort(key=lambda r: r.attendance_date, reverse=True)
        return items[:limit]

    def create(self, *, student_id, attendance_date, status, check_in_time=None) -> int:
        key = (student_id, attendance_date)
        if key in self.by_student_date:
            raise ConflictError("Duplicate entry for uq_attendance_student_date")
        self._id += 1
        self.by_student_date[key] = AttendanceRecord(
            attendance_id=self._id,
            student_id=student_id,
            attendance_date=attendance_date,
            status=status,
            check_in_time=check_in_time,
        )
        return self._id

    def create_if_absent(self, *, student_id, attendance_date, status) -> bool:
        try:
            self.create(student_id=student_id, attendance_date=attendance_date, status=status)
        except ConflictError:
            return False
        return True

    def _key_for(self, attendance_id):
        return next((k for k, r in self.by_student_date.items() if r.attendance_id == attendance_id), None)

    def check_out(self, *, attendance_id, check_out_time) -> bool:
        key = self._key_for(attendance_id)
        record = self.by_student_date.get(key)
        if record is None or record.check_in_time is None or record.check_out_time is not None:
            return False
        self.by_student_date[key] = replace(record, check_out_time=check_out_time)
        return True

    def check_back_in(self, *, record, check_in_time) -> bool:
        key = self._key_for(record.attendance_id)
        if key is None or self.by_student_date[key] != record:
            return False
        audited = record.status != AttendanceStatus.PRESENT
        if audited and self.fail_audit:
            # Same transaction: nothing is written when the audit insert fails.
            raise StorageUnavailableError("audit insert failed")
        self.by_student_date[key] = replace(
            record, status=AttendanceStatus.PRESENT, check_in_time=check_in_time, check_out_time=None
        )
        if audited:
            self.status_changes.append(
                {
                    "attendance_id": record.attendance_id,
                    "previous_status": record.status,
                    "new_status": AttendanceStatus.PRESENT,
                    "changed_at": check_in_time,
                }
            )
        return True


@dataclass
class HostelData:
    blocks: dict[int, Block] = field(default_factory=dict)
    rooms: dict[int, Room] = field(default_factory=dict)
    students: dict[int, Student] = field(default_factory=dict)
    next_id: int = 0

    def new_id(self) -> int:
        self.next_id += 1
        return self.next_id


class InMemoryBlocks:
    def __init__(self, data: HostelData):
        self._data = data

    def get_by_id(self, block_id):
        return self._data.blocks.get(block_id)

    def get_by_key(self, block_key):
        return next((b for b in self._data.blocks.values() if b.block_key == block_key), None)

    def list_all(self):
        return sorted(self._data.blocks.values(), key=lambda b: b.block_id, reverse=True)

    def create(self, *, block_name, block_key, block_theme) -> int:
        if self.get_by_key(block_key):
            raise ConflictError("Duplicate entry for uq_blocks_key")
        block_id = self._data.new_id()
        self._data.blocks[block_id] = Block(block_id, block_name, block_key, block_theme)
        return block_id

    def delete_cascade(self, block_id):
        room_ids = [r.room_id for r in self._data.rooms.values() if r.block_id == block_id]
        student_ids = [s.student_id for s in self._data.students.values() if s.room_id in room_ids]
        for sid in student_ids:
            del self._data.students[sid]
        for rid in room_ids:
            del self._data.rooms[rid]
        self._data.blocks.pop(block_id, None)
        return len(room_ids), len(student_ids)


class InMemoryRooms:
    def __init__(self, data: HostelData):
        self._data = data

    def get_by_id(self, room_id):
        return self._data.rooms.get(room_id)

    def list_by_block_ids(self, block_ids):
        return [r for r in self._data.rooms.values() if r.block_id in block_ids]

    def create(self, *, room_number, floor, capacity, block_id) -> int:
        room_id = self._data.new_id()
        self._data.rooms[room_id] = Room(room_id, room_number, floor, int(capacity), block_id)
        return room_id

    def delete_cascade(self, room_id):
        student_ids = [s.student_id for s in self._data.students.values() if s.room_id == room_id]
        for sid in student_ids:
            del self._data.students[sid]
        self._data.rooms.pop(room_id, None)
        return len(student_ids)


class InMemoryStudents:
    def __init__(self, data: HostelData):
        self._data = data
        self.fail_roster = False

    def list_all_ids(self):
        if self.fail_roster:
            raise RuntimeError("roster unavailable")
        return sorted(self._data.students)

    def get_by_id(self, student_id):
        return self._data.students.get(student_id)

    def get_by_username(self, username):
        return next((s for s in self._data.students.values() if s.username == username), None)

    def list_by_room_ids(self, room_ids):
        return [s for s in self._data.students.values() if s.room_id in room_ids]

    def count_in_room(self, room_id):
        return sum(1 for s in self._data.students.values() if s.room_id == room_id)

    def create(self, student: NewStudent) -> int:
        if self.get_by_username(student.username):
            raise ConflictError("Duplicate entry for uq_students_username")
        student_id = self._data.new_id()
        self._data.students[student_id] = Student(student_id=student_id, **student.__dict__)
        return student_id

    def delete(self, student_id) -> bool:
        return self._data.students.pop(student_id, None) is not None


class InMemoryActivities:
    def __init__(self):
        self.items: dict[int, ClubActivity] = {}
        self._id = 0

    def list_all(self):
        return sorted(self.items.values(), key=lambda a: a.activity_id, reverse=True)

    def get_by_id(self, activity_id):
        return self.items.get(activity_id)

    def create(self, *, title, activity_type, activity_date, description, image_url) -> int:
        self._id += 1
        self.items[self._id] = ClubActivity(self._id, title, activity_type, activity_date, description, image_url)
        return self._id

    def delete(self, activity_id) -> bool:
        return self.items.pop(activity_id, None) is not None


class InMemoryUsers:
    def __init__(self, users: Optional[list[User]] = None):
        self.users = {u.username: u for u in (users or [])}

    def get_by_username(self, username):
        return self.users.get(username)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 10, 20, 9, 30, 0, 123456)


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    return FakeClock(fixed_now)


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def hostel_data() -> HostelData:
    return HostelData()


@pytest.fixture
def blocks_repo(hostel_data) -> InMemoryBlocks:
    return InMemoryBlocks(hostel_data)


@pytest.fixture
def rooms_repo(hostel_data) -> InMemoryRooms:
    return InMemoryRooms(hostel_data)


@pytest.fixture
def students_repo(hostel_data) -> InMemoryStudents:
    return InMemoryStudents(hostel_data)


@pytest.fixture
def users_repo() -> InMemoryUsers:
    admin = User(user_id=1, username="admin", password_hash=generate_password_hash("admin123"), role=Role.ADMIN)
    return InMemoryUsers([admin])


@pytest.fixture
def seeded(blocks_repo, rooms_repo, students_repo):
    """One block with a two-bed room holding one student (password "secret")."""

    block_id = blocks_repo.create(block_name="Block A", block_key="A", block_theme="#3366ff")
    room_id = rooms_repo.create(room_number="101", floor="1", capacity=2, block_id=block_id)
    student_id = students_repo.create(
        NewStudent(
            name="Asha",
            room_id=room_id,
            username="asha",
            password_hash=generate_password_hash("secret"),
            joining_date=date(2025, 7, 1),
        )
    )
    return SimpleNamespace(block_id=block_id, room_id=room_id, student_id=student_id)


@pytest.fixture
def container(clock, tmp_path, users_repo, blocks_repo, rooms_repo, students_repo, attendance_repo):
    return assemble_container(
        clock=clock,
        upload_folder=str(tmp_path / "uploads"),
        users_repo=users_repo,
        blocks_repo=blocks_repo,
        rooms_repo=rooms_repo,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        activities_repo=InMemoryActivities(),
    )


@pytest.fixture
def app(container):
    return create_app(container=container, settings_module="hostel_system.config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    with client.session_transaction() as sess:
        sess["user_id"] = 1
        sess["role"] = Role.ADMIN.value
    return client

