"""Check registry: validated check definitions plus global settings.

Models are frozen and validated at construction, so an invalid registry
cannot exist. `compile_registry` turns the raw mapping read from the config
file into a registry, reporting the first violation as a ConfigError.
"""

import re
from typing import Annotated, Any, Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from src.domain.value_objects.check_types import (
    CheckCategory,
    Framework,
    Platform,
    PullRequestAction,
    ReviewProvider,
    SetupStep,
)

TRIGGER_PREFIX = "/"
NAME_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]*$")

DEFAULT_COLLECTIVE_TRIGGER = "/checks"
DEFAULT_BRANCHES = ("main", "master")


class ConfigError(ValueError):
    """Raised when check definitions or global settings are invalid."""


def default_auto_run_on(must_run: bool) -> frozenset[PullRequestAction]:
    """Mandatory checks run on every push, optional ones only on request."""
    if must_run:
        return frozenset({PullRequestAction.SYNCHRONIZE})
    return frozenset()


def _validate_trigger(value: str, label: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(f"{label} is required")
    if not value.startswith(TRIGGER_PREFIX):
        raise ValueError(f"{label} must start with '{TRIGGER_PREFIX}': {value}")
    if value == TRIGGER_PREFIX:
        raise ValueError(f"{label} needs a command word after '{TRIGGER_PREFIX}'")
    if any(ch.isspace() for ch in value):
        raise ValueError(f"{label} must be a single word: {value!r}")
    return value


class _Model(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class _BaseCheck(_Model):
    name: str
    trigger: str
    must_run: bool = Field(
        default=True,
        validation_alias=AliasChoices("mustRun", "must_run", "required"),
    )
    must_pass: bool = False
    auto_run_on: frozenset[PullRequestAction] | None = None

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name is required")
        if not NAME_PATTERN.match(v):
            raise ValueError(
                f"'{v}' is not a valid check name: use lowercase letters, digits, "
                "'-' and '_', starting with a letter or digit"
            )
        return v

    @field_validator("trigger")
    @classmethod
    def _check_trigger(cls, v: str) -> str:
        return _validate_trigger(v, "trigger")

    @property
    def effective_auto_run_on(self) -> frozenset[PullRequestAction]:
        if self.auto_run_on is None:
            return default_auto_run_on(self.must_run)
        return self.auto_run_on

    @property
    def status_context(self) -> str:
        return self.name

    @property
    def category(self) -> CheckCategory:
        return CheckCategory(getattr(self, "type"))


class PrTestCheck(_BaseCheck):
    type: Literal["pr-test"] = "pr-test"
    command: str
    framework: Framework | None = None
    setup_steps: tuple[SetupStep, ...] | None = None

    @field_validator("command")
    @classmethod
    def _check_command(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("command is required")
        return v


class PrReviewCheck(_BaseCheck):
    type: Literal["pr-review"] = "pr-review"
    provider: ReviewProvider = ReviewProvider.BEDROCK
    model: str = ""
    api_key_secret: str = ""
    cli_tool: str = ""
    cli_command: str | None = None
    custom_rules: str | None = None

    @model_validator(mode="after")
    def _check_provider_fields(self) -> "PrReviewCheck":
        match self.provider:
            case ReviewProvider.BEDROCK:
                if not self.model.strip():
                    raise ValueError("model is required for the bedrock provider")
                if not self.api_key_secret.strip():
                    raise ValueError("apiKeySecret is required for the bedrock provider")
            case ReviewProvider.CLI:
                if not self.cli_tool.strip():
                    raise ValueError("cliTool is required for the cli provider")
        return self


CheckDefinition = Annotated[PrTestCheck | PrReviewCheck, Field(discriminator="type")]


class GlobalConfig(_Model):
    platform: Platform = Platform.GITHUB
    collective_trigger: str = Field(
        default=DEFAULT_COLLECTIVE_TRIGGER,
        validation_alias=AliasChoices("ciTrigger", "collectiveTrigger", "collective_trigger"),
    )
    branches: tuple[str, ...] = DEFAULT_BRANCHES
    generate_override_protocol: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "generateApprovalOverride",
            "generateOverrideProtocol",
            "generate_override_protocol",
        ),
    )

    @field_validator("collective_trigger")
    @classmethod
    def _check_collective(cls, v: str) -> str:
        return _validate_trigger(v, "ciTrigger")

    @field_validator("branches")
    @classmethod
    def _check_branches(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        branches = tuple(b.strip() for b in v if b.strip())
        if not branches:
            raise ValueError("branches must contain at least one branch")
        return branches


class CheckRegistry(BaseModel):
    model_config = ConfigDict(frozen=True)

    settings: GlobalConfig = Field(default_factory=GlobalConfig)
    checks: tuple[CheckDefinition, ...]

    @model_validator(mode="after")
    def _check_uniqueness(self) -> "CheckRegistry":
        if not self.checks:
            raise ValueError("checks must contain at least one check")

        names: set[str] = set()
        for check in self.checks:
            if check.name in names:
                raise ValueError(f"duplicate check name: {check.name}")
            names.add(check.name)

        triggers: set[str] = set()
        for check in self.checks:
            if check.trigger in triggers:
                raise ValueError(f"duplicate trigger: {check.trigger}")
            triggers.add(check.trigger)

        if self.settings.collective_trigger in triggers:
            raise ValueError(
                f"ciTrigger ({self.settings.collective_trigger}) collides with a check trigger"
            )
        return self

    @property
    def collective_trigger(self) -> str:
        return self.settings.collective_trigger

    def all_triggers(self) -> list[str]:
        return [c.trigger for c in self.checks] + [self.settings.collective_trigger]

    def get(self, name: str) -> PrTestCheck | PrReviewCheck | None:
        for check in self.checks:
            if check.name == name:
                return check
        return None

    def mandatory_checks(self) -> list[PrTestCheck | PrReviewCheck]:
        return [c for c in self.checks if c.must_run]

    def test_checks(self) -> list[PrTestCheck]:
        return [c for c in self.checks if isinstance(c, PrTestCheck)]

    def review_checks(self) -> list[PrReviewCheck]:
        return [c for c in self.checks if isinstance(c, PrReviewCheck)]

    def listened_actions(self) -> frozenset[PullRequestAction]:
        """PR actions for which pushes are classified at all.

        Falls back to synchronize when no check auto-runs on anything.
        """
        actions: set[PullRequestAction] = set()
        for check in self.checks:
            actions |= check.effective_auto_run_on
        if not actions:
            actions.add(PullRequestAction.SYNCHRONIZE)
        return frozenset(actions)

    def targets_branch(self, branch: str) -> bool:
        return branch in self.settings.branches


def _format_error(error: Any) -> str:
    loc = ".".join(str(part) for part in error.get("loc", ()))
    ctx_error = error.get("ctx", {}).get("error")
    message = str(ctx_error) if ctx_error is not None else error.get("msg", "invalid value")
    return f"{loc}: {message}" if loc else message


def compile_registry(raw: dict[str, Any]) -> CheckRegistry:
    """Validate a raw config mapping into a CheckRegistry.

    Accepts the config-file shape: global keys at the top level next to a
    `checks` list. Raises ConfigError naming the first violation.
    """
    if not isinstance(raw, dict):
        raise ConfigError("config must be a mapping")
    checks = raw.get("checks")
    if not isinstance(checks, list):
        raise ConfigError("checks must be a list")
    for index, check in enumerate(checks):
        if not isinstance(check, dict):
            raise ConfigError(f"checks.{index}: must be a mapping")
        if "type" not in check:
            raise ConfigError(f"checks.{index}.type: type is required")

    settings = {k: v for k, v in raw.items() if k != "checks"}
    try:
        return CheckRegistry(settings=GlobalConfig.model_validate(settings), checks=checks)
    except ValidationError as e:
        raise ConfigError(_format_error(e.errors()[0])) from e
