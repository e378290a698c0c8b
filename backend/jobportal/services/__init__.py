from jobportal.services import applications, auth, candidates, jobs, recruiters

__all__ = [
    "applications",
    "auth",
    "candidates",
    "jobs",
    "recruiters",
]
