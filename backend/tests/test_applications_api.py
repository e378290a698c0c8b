from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

pytestmark = pytest.mark.integration


@pytest.fixture
def candidate(auth_headers) -> dict[str, str]:
    return auth_headers("carl")


@pytest.fixture
def recruiter(auth_headers) -> dict[str, str]:
    return auth_headers("rita", ["recruiter"])


def _apply(client: TestClient, headers: dict[str, str], job_id: str = "job-1", candidate_id: str = "cand-1"):
    return client.post(
        "/api/applications",
        json={"jobId": job_id, "candidateId": candidate_id, "coverLetter": "Hire me"},
        headers=headers,
    )


def test_apply_duplicate_then_reject(client: TestClient, candidate, recruiter) -> None:
    first = _apply(client, candidate)
    assert first.status_code == 200
    application = first.json()
    assert application["status"] == "APPLIED"
    assert application["reviewDate"] is None

    duplicate = _apply(client, candidate)
    assert duplicate.status_code == 400
    assert duplicate.json() == {"success": False, "message": "You have already applied to this job"}

    rejected = client.put(
        f"/api/applications/{application['id']}/status",
        params={"status": "REJECTED", "reviewNotes": "Not a fit"},
        headers=recruiter,
    )
    assert rejected.status_code == 200
    body = rejected.json()
    assert body["status"] == "REJECTED"
    assert body["reviewDate"] is not None
    assert body["reviewNotes"] == "Not a fit"


def test_recruiter_cannot_apply(client: TestClient, recruiter) -> None:
    assert _apply(client, recruiter).status_code == 403


def test_candidate_cannot_change_status(client: TestClient, candidate) -> None:
    application_id = _apply(client, candidate).json()["id"]

    response = client.put(
        f"/api/applications/{application_id}/status",
        params={"status": "ACCEPTED"},
        headers=candidate,
    )

    assert response.status_code == 403


def test_unknown_status_is_a_validation_error(client: TestClient, candidate, recruiter) -> None:
    application_id = _apply(client, candidate).json()["id"]

    response = client.put(
        f"/api/applications/{application_id}/status",
        params={"status": "HIRED"},
        headers=recruiter,
    )

    assert response.status_code == 400
    assert "status" in response.json()["errors"]


def test_status_update_of_missing_application(client: TestClient, recruiter) -> None:
    response = client.put("/api/applications/missing/status", params={"status": "REVIEWING"}, headers=recruiter)

    assert response.status_code == 404
    assert response.content == b""


def test_strict_transitions_return_bad_request(
    client: TestClient, candidate, recruiter, monkeypatch: pytest.MonkeyPatch
) -> None:
    from jobportal.core.config import settings

    monkeypatch.setattr(settings, "STRICT_STATUS_TRANSITIONS", True)
    application_id = _apply(client, candidate).json()["id"]

    response = client.put(
        f"/api/applications/{application_id}/status",
        params={"status": "ACCEPTED"},
        headers=recruiter,
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Cannot move application from APPLIED to ACCEPTED"


def test_withdraw(client: TestClient, candidate) -> None:
    application_id = _apply(client, candidate).json()["id"]
    other_id = _apply(client, candidate, job_id="job-2").json()["id"]

    missing = client.delete("/api/applications/does-not-exist", headers=candidate)
    assert missing.status_code == 404
    assert client.get(f"/api/applications/{other_id}", headers=candidate).status_code == 200

    withdrawn = client.delete(f"/api/applications/{application_id}", headers=candidate)
    assert withdrawn.json() == {"success": True, "message": "Application withdrawn successfully"}
    assert client.get(f"/api/applications/{application_id}", headers=candidate).status_code == 404


def test_listing_by_candidate_and_job(client: TestClient, candidate, recruiter) -> None:
    _apply(client, candidate, job_id="job-1")
    _apply(client, candidate, job_id="job-2")
    _apply(client, candidate, job_id="job-2", candidate_id="cand-2")

    mine = client.get("/api/applications/candidate/cand-1", headers=candidate).json()
    assert mine["totalItems"] == 2
    assert mine["currentPage"] == 0

    for_job = client.get("/api/applications/job/job-2", params={"size": 1}, headers=recruiter).json()
    assert for_job["totalItems"] == 2
    assert for_job["totalPages"] == 2
    assert len(for_job["applications"]) == 1

    assert client.get("/api/applications/job/job-2", headers=candidate).status_code == 403


def test_notes_and_stats(client: TestClient, candidate, recruiter) -> None:
    application_id = _apply(client, candidate).json()["id"]

    review = client.put(
        f"/api/applications/{application_id}/review",
        params={"reviewNotes": "Solid"},
        headers=recruiter,
    )
    interview = client.put(
        f"/api/applications/{application_id}/interview",
        params={"interviewNotes": "Booked"},
        headers=recruiter,
    )
    assert review.json()["reviewNotes"] == "Solid"
    assert interview.json()["interviewNotes"] == "Booked"

    client.put(f"/api/applications/{application_id}/status", params={"status": "SHORTLISTED"}, headers=recruiter)
    stats = client.get("/api/applications/stats/job/job-1", headers=recruiter)
    assert stats.json() == {
        "total": 1,
        "applied": 0,
        "reviewing": 0,
        "shortlisted": 1,
        "rejected": 0,
        "accepted": 0,
    }
