"""
API v1 router

Aggregates the role-scoped endpoint modules.
"""
from fastapi import APIRouter

from hostelkeeper.api.v1 import admin, students, wardens

router = APIRouter(
    responses={
        400: {"description": "Bad Request"},
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "Not Found"},
        409: {"description": "Conflict"},
        422: {"description": "Validation Error"},
        500: {"description": "Internal Server Error"},
    }
)

router.include_router(students.router)
router.include_router(wardens.router)
router.include_router(admin.router)
