"""
Date and time helpers for the hostel management system
"""

from datetime import date, datetime, timezone
from typing import Optional

import pytz

from hostelkeeper.config.settings import settings


class DateTimeHelper:
    """Timezone aware date helpers"""

    @staticmethod
    def now(tz_name: Optional[str] = None) -> datetime:
        """Get current datetime in the hostel timezone"""
        tz_obj = pytz.timezone(tz_name or settings.TIMEZONE)
        return datetime.now(tz_obj)

    @staticmethod
    def today(tz_name: Optional[str] = None) -> date:
        """Get the current calendar day in the hostel timezone"""
        return DateTimeHelper.now(tz_name).date()

    @staticmethod
    def utcnow() -> datetime:
        return datetime.now(timezone.utc)

    @staticmethod
    def parse_day(value: str) -> date:
        """Parse an ISO ``YYYY-MM-DD`` string"""
        return date.fromisoformat(value)


def today() -> date:
    return DateTimeHelper.today()


def utcnow() -> datetime:
    return DateTimeHelper.utcnow()
