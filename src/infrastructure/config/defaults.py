"""Defaults written by `prchecks init` and merged into partial config files."""

from typing import Any

CONFIG_DIR_NAME = ".pr-checks"
CONFIG_FILE_NAME = "config.yml"

DEFAULT_CHECKS: list[dict[str, Any]] = [
    {
        "name": "pr-test",
        "trigger": "/test",
        "type": "pr-test",
        "mustRun": True,
        "mustPass": True,
        "command": "npm test",
        "framework": "node",
    },
    {
        "name": "pr-review",
        "trigger": "/review",
        "type": "pr-review",
        "mustRun": True,
        "mustPass": False,
        "provider": "bedrock",
        "model": "us.amazon.nova-micro-v1:0",
        "apiKeySecret": "BEDROCK_API_KEY",
    },
]

DEFAULT_CONFIG: dict[str, Any] = {
    "platform": "github",
    "checks": DEFAULT_CHECKS,
    "ciTrigger": "/checks",
    "generateApprovalOverride": True,
    "branches": ["main", "master"],
}

# Toolchain setup per test framework, used when a test check names a
# framework but lists no setupSteps of its own.
FRAMEWORK_SETUP_STEPS: dict[str, list[dict[str, Any]]] = {
    "node": [
        {"name": "Setup Node.js", "uses": "actions/setup-node@v4", "with": {"node-version": "20"}},
        {"name": "Install dependencies", "run": "npm ci"},
    ],
    "python": [
        {"name": "Install uv", "uses": "astral-sh/setup-uv@v4"},
    ],
    "go": [
        {"name": "Setup Go", "uses": "actions/setup-go@v5", "with": {"go-version": "1.22"}},
    ],
    "rust": [
        {"name": "Setup Rust", "uses": "dtolnay/rust-toolchain@stable"},
    ],
    "custom": [],
}
