import copy
from pathlib import Path
from typing import Any

import aiofiles
import yaml
from loguru import logger

from src.domain.entities.check_registry import CheckRegistry, ConfigError, compile_registry
from src.infrastructure.config.atomic_file import write_text_atomic
from src.infrastructure.config.defaults import (
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    DEFAULT_CONFIG,
    FRAMEWORK_SETUP_STEPS,
)


def merge_with_defaults(parsed: dict[str, Any]) -> dict[str, Any]:
    """Fill keys missing from a config file with the defaults.

    An absent `checks` key falls back to the default checks; an explicit
    empty list is kept so validation can reject it.
    """
    merged = copy.deepcopy(DEFAULT_CONFIG)
    merged.update({k: v for k, v in parsed.items() if v is not None})

    checks = merged.get("checks")
    if isinstance(checks, list):
        merged["checks"] = [_with_setup_steps(c) for c in checks]
    return merged


def _with_setup_steps(check: Any) -> Any:
    if not isinstance(check, dict) or check.get("type") != "pr-test":
        return check
    framework = check.get("framework")
    if framework in FRAMEWORK_SETUP_STEPS and not check.get("setupSteps"):
        return {**check, "setupSteps": copy.deepcopy(FRAMEWORK_SETUP_STEPS[framework])}
    return check


class YamlConfigStore:
    """Reads and creates `.pr-checks/config.yml` under a repository root."""

    def __init__(self, cwd: Path) -> None:
        self.cwd = cwd

    @property
    def config_dir(self) -> Path:
        return self.cwd / CONFIG_DIR_NAME

    @property
    def config_path(self) -> Path:
        return self.config_dir / CONFIG_FILE_NAME

    def exists(self) -> bool:
        return self.config_path.exists()

    async def load_raw(self) -> dict[str, Any]:
        if not self.exists():
            logger.info("No {} found, using defaults", self.config_path)
            return merge_with_defaults({})

        try:
            async with aiofiles.open(self.config_path, encoding="utf-8") as f:
                content = await f.read()
        except OSError as e:
            raise ConfigError(f"Failed to read config file {self.config_path}: {e}") from e

        try:
            parsed = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse {self.config_path}: {e}") from e

        if parsed is None:
            logger.warning("{} is empty, using defaults", self.config_path)
            parsed = {}
        elif not isinstance(parsed, dict):
            raise ConfigError(f"{self.config_path} must contain a mapping")

        return merge_with_defaults(parsed)

    async def load(self) -> CheckRegistry:
        registry = compile_registry(await self.load_raw())
        logger.debug(
            "Loaded {} check(s), collective trigger {}",
            len(registry.checks),
            registry.collective_trigger,
        )
        return registry

    async def create_default(self) -> list[Path]:
        """Write the default config unless one exists. Returns created files."""
        if self.exists():
            return []
        content = yaml.safe_dump(DEFAULT_CONFIG, sort_keys=False, allow_unicode=True)
        try:
            await write_text_atomic(self.config_path, content)
        except OSError as e:
            raise ConfigError(f"Failed to write config file {self.config_path}: {e}") from e
        logger.info("Created {}", self.config_path)
        return [self.config_path.relative_to(self.cwd)]
