from __future__ import annotations

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from jobportal.core.dependencies import parse_bearer_token
from jobportal.core.security import create_access_token
from jobportal.models import User

pytestmark = pytest.mark.integration

RECRUITER_ROUTE = "/api/jobs/recruiter/rec-1"


def test_protected_route_without_token(client: TestClient) -> None:
    response = client.get(RECRUITER_ROUTE)

    assert response.status_code == 401
    assert response.json() == {
        "status": 401,
        "error": "Unauthorized",
        "message": "Full authentication is required to access this resource",
        "path": RECRUITER_ROUTE,
    }


def test_protected_route_with_wrong_role(client: TestClient, auth_headers) -> None:
    response = client.get(RECRUITER_ROUTE, headers=auth_headers("carl"))

    assert response.status_code == 403
    body = response.json()
    assert body["error"] == "Access Denied"
    assert body["path"] == RECRUITER_ROUTE


def test_protected_route_with_required_role(client: TestClient, auth_headers) -> None:
    response = client.get(RECRUITER_ROUTE, headers=auth_headers("rita", ["recruiter"]))

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.parametrize(
    "authorization",
    [
        "Bearer not-a-token",
        "Token abc",
        f"Bearer {create_access_token('rita', expires_delta=timedelta(seconds=-1))}",
    ],
)
def test_bad_credentials_leave_request_anonymous(client: TestClient, signup, authorization: str) -> None:
    signup("rita", ["recruiter"])

    assert client.get(RECRUITER_ROUTE, headers={"Authorization": authorization}).status_code == 401
    assert client.get("/api/jobs", headers={"Authorization": authorization}).status_code == 200


def test_token_for_unknown_user_is_anonymous(client: TestClient) -> None:
    headers = {"Authorization": f"Bearer {create_access_token('ghost')}"}

    assert client.get(RECRUITER_ROUTE, headers=headers).status_code == 401


def test_role_changes_apply_to_existing_tokens(client: TestClient, db: Session, auth_headers) -> None:
    headers = auth_headers("bob")
    assert client.get(RECRUITER_ROUTE, headers=headers).status_code == 403

    user = db.query(User).filter(User.username == "bob").one()
    user.roles = ["RECRUITER"]
    db.commit()

    assert client.get(RECRUITER_ROUTE, headers=headers).status_code == 200


def test_any_listed_role_is_enough(client: TestClient, auth_headers) -> None:
    headers = auth_headers("ada", ["admin"])

    # recruiter profiles by company admit RECRUITER or ADMIN
    assert client.get("/api/recruiters/company/Acme", headers=headers).status_code == 200


@pytest.mark.parametrize(
    ("header", "token"),
    [
        ("Bearer abc.def.ghi", "abc.def.ghi"),
        ("Bearer    ", None),
        ("bearer abc", None),
        ("Basic abc", None),
        (None, None),
    ],
)
def test_parse_bearer_token(header, token) -> None:
    assert parse_bearer_token(header) == token
