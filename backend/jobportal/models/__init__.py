from jobportal.models.role import Role
from jobportal.models.user import User
from jobportal.models.job import Job
from jobportal.models.application import ApplicationStatus, JobApplication
from jobportal.models.candidate import Candidate
from jobportal.models.recruiter import Recruiter

__all__ = [
    "Role",
    "User",
    "Job",
    "ApplicationStatus",
    "JobApplication",
    "Candidate",
    "Recruiter",
]
