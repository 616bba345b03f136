from enum import Enum


class PermissionLevel(str, Enum):
    OWNER = "owner"
    ADMIN = "admin"
    MAINTAIN = "maintain"
    WRITE = "write"
    TRIAGE = "triage"
    READ = "read"
    NONE = "none"

    @classmethod
    def parse(cls, value: str | None) -> "PermissionLevel":
        """Map a host permission string, treating unknown values as NONE."""
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.NONE


TRIGGER_PERMISSIONS = frozenset(
    {
        PermissionLevel.OWNER,
        PermissionLevel.ADMIN,
        PermissionLevel.MAINTAIN,
        PermissionLevel.WRITE,
    }
)
