import pytest

from src.domain.entities.check_registry import CheckRegistry
from src.domain.value_objects.permission import PermissionLevel
from src.domain.value_objects.pull_request import PullRequestInfo
from tests.fakes import FakeHost, make_registry


@pytest.fixture
def registry() -> CheckRegistry:
    return make_registry()


@pytest.fixture
def host() -> FakeHost:
    fake = FakeHost()
    fake.permissions["maintainer"] = PermissionLevel.WRITE
    fake.permissions["visitor"] = PermissionLevel.READ
    fake.pull_requests[7] = PullRequestInfo(number=7, head_sha="abc1234def", base_ref="main")
    return fake
