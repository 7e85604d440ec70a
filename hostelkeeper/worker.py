"""
Celery application and scheduled jobs.

Run the worker and scheduler with::

    celery -A hostelkeeper.worker worker --beat --loglevel=info
"""

from typing import Any, Dict, Optional

from celery import Celery
from celery.schedules import crontab

from hostelkeeper.config.settings import settings
from hostelkeeper.core.logging import get_logger
from hostelkeeper.db.session import get_db_context
from hostelkeeper.services.background.auto_attendance_service import AutoAttendanceService
from hostelkeeper.services.hostel.hostel_service import HostelService
from hostelkeeper.utils.datetime_utils import DateTimeHelper

logger = get_logger(__name__)

celery_app = Celery(
    "hostelkeeper",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND or settings.CELERY_BROKER_URL,
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone=settings.TIMEZONE,
    enable_utc=True,
    task_track_started=True,
    worker_hijack_root_logger=False,
)

celery_app.conf.beat_schedule = {
    "auto-attendance-daily": {
        "task": "hostelkeeper.worker.run_auto_attendance",
        "schedule": crontab(hour=settings.AUTO_ATTENDANCE_HOUR, minute=settings.AUTO_ATTENDANCE_MINUTE),
    },
    "hostel-aggregate-sweep": {
        "task": "hostelkeeper.worker.recompute_hostel_aggregates",
        "schedule": crontab(hour=settings.AGGREGATE_SWEEP_HOUR, minute=0),
    },
}


def run_auto_attendance_once(day: Optional[str] = None) -> Dict[str, Any]:
    """Run the reconciler in its own session; ``day`` is an ISO date."""
    target = DateTimeHelper.parse_day(day) if day else None
    with get_db_context() as db:
        result = AutoAttendanceService(db).run(target)

    summary = dict(result.data or {})
    if "date" in summary:
        summary["date"] = summary["date"].isoformat()
    if not result.is_success:
        logger.error(f"Auto-attendance run failed: {result.message}")
    return {"success": result.is_success, **summary}


@celery_app.task(name="hostelkeeper.worker.run_auto_attendance")
def run_auto_attendance(day: Optional[str] = None) -> Dict[str, Any]:
    return run_auto_attendance_once(day)


@celery_app.task(name="hostelkeeper.worker.recompute_hostel_aggregates")
def recompute_hostel_aggregates() -> Dict[str, Any]:
    with get_db_context() as db:
        drift = HostelService(db).recompute_aggregates()
    return {"corrected": len(drift), "drift": drift}
