from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CheckCategory(str, Enum):
    TEST = "pr-test"
    REVIEW = "pr-review"


class Framework(str, Enum):
    NODE = "node"
    PYTHON = "python"
    GO = "go"
    RUST = "rust"
    CUSTOM = "custom"


class ReviewProvider(str, Enum):
    BEDROCK = "bedrock"
    CLI = "cli"


class Platform(str, Enum):
    GITHUB = "github"
    GITEA = "gitea"


class PullRequestAction(str, Enum):
    OPENED = "opened"
    SYNCHRONIZE = "synchronize"
    REOPENED = "reopened"
    READY_FOR_REVIEW = "ready_for_review"


class SetupStep(BaseModel):
    """Toolchain setup step handed to the workflow emitter as-is."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    uses: str | None = None
    run: str | None = None
    with_: dict[str, Any] | None = Field(default=None, alias="with")
