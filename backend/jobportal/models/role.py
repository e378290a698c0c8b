import enum
from typing import Iterable, Optional

AUTHORITY_PREFIX = "ROLE_"

_REQUESTED_ROLE_NAMES = {
    "admin": "ADMIN",
    "recruiter": "RECRUITER",
}


class Role(str, enum.Enum):
    """Closed set of permission groups a user can hold."""

    CANDIDATE = "CANDIDATE"
    RECRUITER = "RECRUITER"
    ADMIN = "ADMIN"

    @property
    def authority(self) -> str:
        return f"{AUTHORITY_PREFIX}{self.value}"

    @classmethod
    def from_requested(cls, requested: Optional[Iterable[str]]) -> set["Role"]:
        """
        Map role names from a signup request onto the enum.

        Matching is case-insensitive and ignores surrounding whitespace.
        Anything other than "admin" or "recruiter" becomes CANDIDATE, and an
        empty or missing request yields {CANDIDATE}.
        """
        roles: set[Role] = set()
        for name in requested or ():
            key = (name or "").strip().lower()
            roles.add(cls(_REQUESTED_ROLE_NAMES.get(key, cls.CANDIDATE.value)))

        if not roles:
            roles.add(cls.CANDIDATE)
        return roles
