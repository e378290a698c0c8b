from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobportal.models import ApplicationStatus, JobApplication
from jobportal.services import applications as application_service
from jobportal.services.applications import (
    ALLOWED_TRANSITIONS,
    InvalidStatusTransitionError,
    check_status_transition,
)

pytestmark = pytest.mark.unit


def test_apply_creates_applied_record(db: Session) -> None:
    application = application_service.apply_to_job(db, "cand-1", "job-1", cover_letter="Hello")

    assert application is not None
    assert application.status == ApplicationStatus.APPLIED.value
    assert application.application_date is not None
    assert application.review_date is None
    assert application.cover_letter == "Hello"


def test_second_application_to_same_job_is_refused(db: Session) -> None:
    assert application_service.apply_to_job(db, "cand-1", "job-1") is not None

    assert application_service.apply_to_job(db, "cand-1", "job-1") is None
    assert application_service.count_applications_by_candidate(db, "cand-1") == 1


def test_same_candidate_may_apply_to_other_jobs(db: Session) -> None:
    application_service.apply_to_job(db, "cand-1", "job-1")

    assert application_service.apply_to_job(db, "cand-1", "job-2") is not None
    assert application_service.apply_to_job(db, "cand-2", "job-1") is not None


def test_unique_constraint_backs_duplicate_check(db: Session) -> None:
    db.add(JobApplication(candidate_id="cand-1", job_id="job-1"))
    db.commit()

    db.add(JobApplication(candidate_id="cand-1", job_id="job-1"))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_status_update_stamps_review_date_and_keeps_notes(db: Session) -> None:
    application = application_service.apply_to_job(db, "cand-1", "job-1")

    reviewed = application_service.update_application_status(
        db, application.id, ApplicationStatus.REVIEWING, "Strong profile"
    )
    assert reviewed.status == "REVIEWING"
    assert reviewed.review_date is not None
    assert reviewed.review_notes == "Strong profile"

    rejected = application_service.update_application_status(db, application.id, ApplicationStatus.REJECTED)
    assert rejected.status == "REJECTED"
    assert rejected.review_notes == "Strong profile"


def test_status_update_is_permissive_by_default(db: Session) -> None:
    application = application_service.apply_to_job(db, "cand-1", "job-1")
    application_service.update_application_status(db, application.id, ApplicationStatus.ACCEPTED)

    reopened = application_service.update_application_status(db, application.id, ApplicationStatus.APPLIED)

    assert reopened.status == "APPLIED"


def test_status_update_for_missing_application(db: Session) -> None:
    assert application_service.update_application_status(db, "missing", ApplicationStatus.REVIEWING) is None


@pytest.mark.parametrize(
    ("current", "new"),
    [
        (ApplicationStatus.APPLIED, ApplicationStatus.REVIEWING),
        (ApplicationStatus.REVIEWING, ApplicationStatus.SHORTLISTED),
        (ApplicationStatus.SHORTLISTED, ApplicationStatus.ACCEPTED),
        (ApplicationStatus.APPLIED, ApplicationStatus.REJECTED),
        (ApplicationStatus.SHORTLISTED, ApplicationStatus.REJECTED),
    ],
)
def test_strict_mode_accepts_diagram_edges(current: ApplicationStatus, new: ApplicationStatus) -> None:
    check_status_transition(current, new, strict=True)


@pytest.mark.parametrize(
    ("current", "new"),
    [
        (ApplicationStatus.APPLIED, ApplicationStatus.ACCEPTED),
        (ApplicationStatus.REJECTED, ApplicationStatus.APPLIED),
        (ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED),
        (ApplicationStatus.REVIEWING, ApplicationStatus.REVIEWING),
    ],
)
def test_strict_mode_rejects_other_changes(current: ApplicationStatus, new: ApplicationStatus) -> None:
    with pytest.raises(InvalidStatusTransitionError):
        check_status_transition(current, new, strict=True)

    check_status_transition(current, new, strict=False)


def test_terminal_states_have_no_exits() -> None:
    terminal = {status for status, targets in ALLOWED_TRANSITIONS.items() if not targets}

    assert terminal == {ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED}
    assert set(ALLOWED_TRANSITIONS) == set(ApplicationStatus)


def test_strict_setting_applies_to_status_updates(db: Session, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(application_service.settings, "STRICT_STATUS_TRANSITIONS", True)
    application = application_service.apply_to_job(db, "cand-1", "job-1")

    with pytest.raises(InvalidStatusTransitionError):
        application_service.update_application_status(db, application.id, ApplicationStatus.ACCEPTED)

    db.expire_all()
    assert application_service.get_application_by_id(db, application.id).status == "APPLIED"


def test_withdraw_missing_application_leaves_others(db: Session) -> None:
    kept = application_service.apply_to_job(db, "cand-1", "job-1")

    assert application_service.withdraw_application(db, "missing") is False
    assert application_service.get_application_by_id(db, kept.id) is not None

    assert application_service.withdraw_application(db, kept.id) is True
    assert application_service.get_application_by_id(db, kept.id) is None


def test_notes_are_recorded(db: Session) -> None:
    application = application_service.apply_to_job(db, "cand-1", "job-1")

    application_service.add_review_notes(db, application.id, "Good portfolio")
    updated = application_service.add_interview_notes(db, application.id, "Round 1 passed")

    assert updated.review_notes == "Good portfolio"
    assert updated.interview_notes == "Round 1 passed"
    assert application_service.add_review_notes(db, "missing", "x") is None
    assert application_service.add_interview_notes(db, "missing", "x") is None


def test_job_stats_count_every_status(db: Session) -> None:
    first = application_service.apply_to_job(db, "cand-1", "job-1")
    application_service.apply_to_job(db, "cand-2", "job-1")
    third = application_service.apply_to_job(db, "cand-3", "job-1")
    application_service.apply_to_job(db, "cand-1", "job-2")
    application_service.update_application_status(db, first.id, ApplicationStatus.REJECTED)
    application_service.update_application_status(db, third.id, ApplicationStatus.SHORTLISTED)

    assert application_service.get_application_stats(db, "job-1") == {
        "total": 3,
        "applied": 1,
        "reviewing": 0,
        "shortlisted": 1,
        "rejected": 1,
        "accepted": 0,
    }


def test_lookups_by_candidate_status_and_recency(db: Session) -> None:
    old = application_service.apply_to_job(db, "cand-1", "job-1")
    application_service.apply_to_job(db, "cand-1", "job-2")
    application_service.apply_to_job(db, "cand-2", "job-2")
    old.application_date = datetime.utcnow() - timedelta(days=30)
    db.commit()

    page = application_service.get_applications_by_candidate(db, "cand-1", size=1)
    assert page.total_items == 2
    assert page.total_pages == 2
    assert [item.job_id for item in page.items] == ["job-2"]

    by_job = application_service.get_applications_by_job(db, "job-2")
    assert {item.candidate_id for item in by_job.items} == {"cand-1", "cand-2"}

    assert len(application_service.get_applications_by_status(db, ApplicationStatus.APPLIED)) == 3
    assert len(application_service.get_recent_applications(db, 7)) == 2
    assert application_service.count_applications_by_candidate_and_status(db, "cand-1") == {"APPLIED": 2}
