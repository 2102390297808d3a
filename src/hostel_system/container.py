from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .activities.mysql_activity_repository import MySQLActivityRepository
from .activities.repository import ActivityRepository
from .activities.service import ActivityService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .attendance.sweeper import AbsenceSweeper
from .blocks.mysql_block_repository import MySQLBlockRepository
from .blocks.repository import BlockRepository
from .blocks.service import BlockService
from .common.datetime_utils import Clock
from .core.constants import DEFAULT_DB_READ_RETRIES, DEFAULT_TIMEZONE
from .database.connection import DatabaseConnection, config_from_dict
from .rooms.mysql_room_repository import MySQLRoomRepository
from .rooms.repository import RoomRepository
from .rooms.service import RoomService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    clock: Clock

    users_repo: UserRepository
    blocks_repo: BlockRepository
    rooms_repo: RoomRepository
    students_repo: StudentRepository
    attendance_repo: AttendanceRepository
    activities_repo: ActivityRepository

    auth_service: AuthService
    block_service: BlockService
    room_service: RoomService
    student_service: StudentService
    attendance_service: AttendanceService
    absence_sweeper: AbsenceSweeper
    activity_service: ActivityService


def assemble_container(
    *,
    clock: Clock,
    upload_folder: str,
    users_repo: UserRepository,
    blocks_repo: BlockRepository,
    rooms_repo: RoomRepository,
    students_repo: StudentRepository,
    attendance_repo: AttendanceRepository,
    activities_repo: ActivityRepository,
) -> Container:
    """Wire services onto the given repositories.

    The toggle engine and the sweeper share one clock so they agree on "today".
    """

    return Container(
        clock=clock,
        users_repo=users_repo,
        blocks_repo=blocks_repo,
        rooms_repo=rooms_repo,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        activities_repo=activities_repo,
        auth_service=AuthService(users_repo, students_repo),
        block_service=BlockService(blocks_repo, rooms_repo, students_repo),
        room_service=RoomService(rooms_repo, blocks_repo),
        student_service=StudentService(students_repo, rooms_repo, blocks_repo, attendance_repo, clock),
        attendance_service=AttendanceService(attendance_repo, clock),
        absence_sweeper=AbsenceSweeper(attendance_repo, students_repo),
        activity_service=ActivityService(activities_repo, upload_folder),
    )


def build_container(*, db_config: dict, settings: Optional[Any] = None) -> Container:
    conn = DatabaseConnection.get_instance(config_from_dict(db_config))
    read_retries = int(getattr(settings, "DB_READ_RETRIES", DEFAULT_DB_READ_RETRIES))
    upload_folder = str(getattr(settings, "UPLOAD_FOLDER", "uploads"))
    clock = Clock(str(getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE)))

    return assemble_container(
        clock=clock,
        upload_folder=upload_folder,
        users_repo=MySQLUserRepository(conn, read_retries=read_retries),
        blocks_repo=MySQLBlockRepository(conn, read_retries=read_retries),
        rooms_repo=MySQLRoomRepository(conn, read_retries=read_retries),
        students_repo=MySQLStudentRepository(conn, read_retries=read_retries),
        attendance_repo=MySQLAttendanceRepository(conn, read_retries=read_retries),
        activities_repo=MySQLActivityRepository(conn, read_retries=read_retries),
    )
