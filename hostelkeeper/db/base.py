"""Declarative base with every model registered on its metadata."""
from hostelkeeper.models.base import Base  # noqa: F401

# Imported for their side effect of registering tables on Base.metadata
from hostelkeeper.models import (  # noqa: F401
    attendance,
    complaint,
    health_issue,
    hostel,
    hostel_request,
    leave_request,
    notice,
    room,
    student_return,
    user,
)
