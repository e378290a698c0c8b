from __future__ import annotations

import pytest

from jobportal.models import Role, User

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("requested", "expected"),
    [
        (None, {Role.CANDIDATE}),
        ([], {Role.CANDIDATE}),
        (["recruiter"], {Role.RECRUITER}),
        (["admin"], {Role.ADMIN}),
        (["Recruiter", " ADMIN "], {Role.RECRUITER, Role.ADMIN}),
        (["candidate"], {Role.CANDIDATE}),
        (["superuser"], {Role.CANDIDATE}),
        (["recruiter", "whatever"], {Role.RECRUITER, Role.CANDIDATE}),
    ],
)
def test_requested_roles_are_normalised(requested, expected) -> None:
    assert Role.from_requested(requested) == expected


def test_authority_carries_role_prefix() -> None:
    assert Role.RECRUITER.authority == "ROLE_RECRUITER"


def test_user_authorities_are_sorted_and_skip_unknown_names() -> None:
    user = User(username="alice", email="alice@example.com", hashed_password="x", roles=["RECRUITER", "ADMIN", "OWNER"])

    assert user.role_set == frozenset({Role.RECRUITER, Role.ADMIN})
    assert user.authorities == ["ROLE_ADMIN", "ROLE_RECRUITER"]
