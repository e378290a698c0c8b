"""
API Router Aggregator.

Combines all v1 API routers into a single router for the main app. Every
request through it resolves its security context first.
"""

from fastapi import APIRouter, Depends

from jobportal.api.v1 import applications, auth, candidates, jobs, recruiters
from jobportal.core.dependencies import get_security_context

api_router = APIRouter(dependencies=[Depends(get_security_context)])

# Include all v1 routers with their prefixes and tags
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Authentication"],
)

api_router.include_router(
    jobs.router,
    prefix="/jobs",
    tags=["Jobs"],
)

api_router.include_router(
    candidates.router,
    prefix="/candidates",
    tags=["Candidates"],
)

api_router.include_router(
    recruiters.router,
    prefix="/recruiters",
    tags=["Recruiters"],
)

api_router.include_router(
    applications.router,
    prefix="/applications",
    tags=["Applications"],
)
