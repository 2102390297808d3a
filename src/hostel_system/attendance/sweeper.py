from __future__ import annotations

import logging
from datetime import datetime

from ..core.enums import AttendanceStatus
from ..students.repository import StudentRepository
from .model import SweepReport
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AbsenceSweeper:
    """Backfill an Absent record for every student with no record for the day."""

    def __init__(self, attendance: AttendanceRepository, students: StudentRepository):
        self._attendance = attendance
        self._students = students

    def run_nightly_sweep(self, as_of: datetime) -> SweepReport:
        """Sweep the calendar day of `as_of`.

        A roster failure aborts the run. A failure for one student is logged
        and counted, and the loop moves on. Running twice for the same day
        creates nothing the second time.
        """

        day = as_of.date()
        logger.info("Nightly sweep started for %s", day)

        try:
            student_ids = list(self._students.list_all_ids())
        except Exception:
            logger.exception("Nightly sweep for %s aborted: could not load the student roster", day)
            raise

        created = skipped = failed = 0
        for student_id in student_ids:
            try:
                inserted = self._attendance.create_if_absent(
                    student_id=student_id,
                    attendance_date=day,
                    status=AttendanceStatus.ABSENT,
                )
            except Exception:
                failed += 1
                logger.exception("Nightly sweep could not mark student %s for %s", student_id, day)
                continue

            if inserted:
                created += 1
            else:
                skipped += 1

        report = SweepReport(day=day, examined=len(student_ids), created=created, skipped=skipped, failed=failed)
        logger.info(
            "Nightly sweep complete for %s: %s marked Absent, %s already recorded, %s failed",
            day,
            created,
            skipped,
            failed,
        )
        return report
