from __future__ import annotations

import logging
import os
import time
from typing import Any, Callable, Optional

from werkzeug.utils import secure_filename

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_id
from ..core.exceptions import NotFoundError, ValidationError
from .model import ClubActivity
from .repository import ActivityRepository

logger = logging.getLogger(__name__)

UPLOAD_URL_PREFIX = "/uploads/"


def _millis() -> int:
    return int(time.time() * 1000)


class ActivityService:
    """Club activity board. Images are stored on disk under `upload_folder`."""

    def __init__(
        self,
        activities: ActivityRepository,
        upload_folder: str,
        *,
        millis: Callable[[], int] = _millis,
    ):
        self._activities = activities
        self._upload_folder = upload_folder
        self._millis = millis

    @property
    def upload_folder(self) -> str:
        return self._upload_folder

    def list_activities(self) -> list[ClubActivity]:
        return list(self._activities.list_all())

    def create_activity(
        self,
        *,
        title: Any,
        activity_type: Any,
        activity_date: Any,
        description: Any = None,
        image: Optional[Any] = None,
    ) -> ClubActivity:
        """`image` is a werkzeug FileStorage (or anything with `filename` and `save`)."""

        title = str(title or "").strip()
        activity_type = str(activity_type or "").strip()
        if not title or not activity_type or not activity_date:
            raise ValidationError("Title, Type, and Date are required")

        parsed_date = parse_iso_date(activity_date)
        image_url = self._save_image(image) if image is not None and image.filename else ""

        activity_id = self._activities.create(
            title=title,
            activity_type=activity_type,
            activity_date=parsed_date,
            description=description or None,
            image_url=image_url,
        )
        activity = self._activities.get_by_id(activity_id)
        if activity is None:
            raise NotFoundError("Activity not found.")
        logger.info("Activity %s added: %s", activity_id, activity.title)
        return activity

    def _save_image(self, image: Any) -> str:
        _, ext = os.path.splitext(secure_filename(image.filename))
        filename = f"image-{self._millis()}{ext.lower()}"
        os.makedirs(self._upload_folder, exist_ok=True)
        image.save(os.path.join(self._upload_folder, filename))
        return UPLOAD_URL_PREFIX + filename

    def delete_activity(self, activity_id: Any) -> None:
        # The stored image file is left in place.
        activity_id = require_id(activity_id, "Activity ID")
        if not self._activities.delete(activity_id):
            raise NotFoundError("Activity not found.")
        logger.info("Activity %s deleted", activity_id)
