"""
Job Portal Database Seeder

Creates demo accounts and data:
- A recruiter (recruiter1 / recruiter123) with a company profile and one job
- A candidate (candidate1 / candidate123) with a profile who applied to it
- An admin (admin / admin12345)
"""

import sys
sys.path.insert(0, ".")

from datetime import datetime, timedelta

from jobportal.db.session import SessionLocal, engine
from jobportal.db.base import Base
from jobportal.models import Role, User
from jobportal.services.applications import apply_to_job
from jobportal.services.auth import get_user_by_username, register_user
from jobportal.services.candidates import create_candidate_profile
from jobportal.services.jobs import create_job
from jobportal.services.recruiters import create_recruiter_profile


def seed_database():
    """Seed the database with demo data."""

    # Create all tables
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()

    try:
        # Check if already seeded
        if get_user_by_username(db, "recruiter1"):
            print("Database already seeded. Skipping...")
            return

        print("Seeding database...")

        # 1. Accounts
        recruiter_user: User = register_user(
            db, "recruiter1", "recruiter@jobportal.dev", "recruiter123", [Role.RECRUITER.value.lower()]
        )
        candidate_user: User = register_user(
            db, "candidate1", "candidate@jobportal.dev", "candidate123", None
        )
        register_user(db, "admin", "admin@jobportal.dev", "admin12345", [Role.ADMIN.value.lower()])

        # 2. Recruiter profile and a job posting
        recruiter = create_recruiter_profile(db, {
            "user_id": recruiter_user.id,
            "company_name": "Acme Software",
            "company_size": "51-200",
            "location": "Beirut",
            "industry": "Software",
            "position": "Talent Acquisition Lead",
            "company_website": "https://acme.example.com",
        })

        job = create_job(db, {
            "title": "Backend Engineer",
            "description": "Design and build REST APIs in Python backed by a relational database.",
            "company_name": recruiter.company_name,
            "location": "Beirut",
            "category": "Engineering",
            "employment_type": "FULL_TIME",
            "salary": 60000.0,
            "recruiter_id": recruiter.id,
            "requirements": ["3+ years of Python", "SQL"],
            "responsibilities": ["Own API design", "Review code"],
            "deadline": datetime.utcnow() + timedelta(days=30),
        })

        # 3. Candidate profile and an application
        candidate = create_candidate_profile(db, {
            "user_id": candidate_user.id,
            "first_name": "Jane",
            "last_name": "Doe",
            "location": "Beirut",
            "current_title": "Software Developer",
            "experience_level": "MID",
            "years_of_experience": 4,
            "skills": ["Python", "FastAPI", "SQL"],
            "experience": [
                {
                    "title": "Software Developer",
                    "company": "Initech",
                    "start_date": "2021-03-01",
                    "is_current": True,
                }
            ],
            "education": [
                {"degree": "B.S.", "institution": "AUB", "field": "Computer Science", "gpa": 3.6}
            ],
            "is_available": True,
        })

        apply_to_job(
            db,
            candidate_id=candidate.id,
            job_id=job.id,
            cover_letter="I have built several FastAPI services and would love to join.",
        )

        print("Database seeded successfully!")
        print("  Recruiter: recruiter1 / recruiter123")
        print("  Candidate: candidate1 / candidate123")
        print("  Admin:     admin / admin12345")

    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
