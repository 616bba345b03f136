import os

from pydantic import BaseModel, field_validator

DEFAULT_API_URL = "https://api.github.com"


class HostSettings(BaseModel, frozen=True):
    api_url: str = DEFAULT_API_URL
    repository: str
    token: str
    timeout_s: float = 30.0

    @field_validator("api_url")
    @classmethod
    def _strip_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("repository")
    @classmethod
    def _check_repository(cls, v: str) -> str:
        owner, sep, name = v.partition("/")
        if not sep or not owner or not name:
            raise ValueError(f"repository must look like 'owner/name': {v!r}")
        return v

    @classmethod
    def from_env(cls) -> "HostSettings":
        """Read the runner environment (GitHub Actions and Gitea Actions use the same names)."""
        return cls(
            api_url=os.environ.get("GITHUB_API_URL") or DEFAULT_API_URL,
            repository=os.environ.get("GITHUB_REPOSITORY", ""),
            token=os.environ.get("GITHUB_TOKEN", ""),
        )
