from loguru import logger

from src.domain.entities.check_registry import CheckRegistry
from src.domain.ports.host_port import HostPort, HostQueryError
from src.domain.services.trigger_parser import match_trigger
from src.domain.value_objects.check_types import Platform
from src.domain.value_objects.decision import AbortReason, Decision
from src.domain.value_objects.events import CommentEvent, PushEvent
from src.domain.value_objects.permission import TRIGGER_PERMISSIONS


def classify_push(registry: CheckRegistry, event: PushEvent) -> Decision:
    """Classify a push from its payload alone; no host call is needed."""
    if event.is_draft:
        logger.info("Draft PR #{} - skipping auto run", event.pr_number)
        return Decision.abort(AbortReason.DRAFT_PULL_REQUEST, event.pr_number)

    if event.base_branch and not registry.targets_branch(event.base_branch):
        logger.debug("PR #{} targets unwatched branch {}", event.pr_number, event.base_branch)
        return Decision.abort(AbortReason.BRANCH_NOT_TARGETED, event.pr_number)

    if event.action not in registry.listened_actions():
        logger.debug("PR #{} action '{}' not listened", event.pr_number, event.action.value)
        return Decision.abort(AbortReason.ACTION_NOT_LISTENED, event.pr_number)

    auto_run = {
        check.name: event.action in check.effective_auto_run_on for check in registry.checks
    }
    return Decision(
        should_continue=True,
        pr_number=event.pr_number,
        head_sha=event.head_sha,
        fired_trigger=None,
        user_message="",
        is_official=True,
        auto_run=auto_run,
    )


class ClassifyEvent:
    """Decide whether a push or comment starts any checks, and which."""

    def __init__(self, host: HostPort, registry: CheckRegistry):
        self.host = host
        self.registry = registry

    async def execute(self, event: PushEvent | CommentEvent) -> Decision:
        if isinstance(event, PushEvent):
            return classify_push(self.registry, event)
        try:
            return await self._classify_comment(event)
        except HostQueryError as e:
            logger.warning("Aborting PR #{} classification: {}", event.pr_number, e)
            return Decision.abort(AbortReason.HOST_QUERY_FAILED, event.pr_number)

    async def _classify_comment(self, event: CommentEvent) -> Decision:
        if self.registry.settings.platform == Platform.GITHUB:
            permission = await self.host.get_permission(event.author_login)
            if permission not in TRIGGER_PERMISSIONS:
                logger.info(
                    "User {} does not have write permission (got: {})",
                    event.author_login,
                    permission.value,
                )
                return Decision.abort(AbortReason.PERMISSION_DENIED, event.pr_number)

        command = match_trigger(event.raw_body, self.registry.all_triggers())
        if command is None:
            return Decision.abort(AbortReason.UNRECOGNIZED_TRIGGER, event.pr_number)

        # Head may have moved since the comment was written; always ask the host.
        pull_request = await self.host.get_pull_request(event.pr_number)
        if not pull_request.head_sha:
            logger.warning("PR #{} has no head SHA", event.pr_number)
            return Decision.abort(AbortReason.HOST_QUERY_FAILED, event.pr_number)

        logger.info(
            "PR #{} fired {} ({})",
            event.pr_number,
            command.candidate,
            "official" if command.is_official else "unofficial",
        )
        return Decision(
            should_continue=True,
            pr_number=event.pr_number,
            head_sha=pull_request.head_sha,
            fired_trigger=command.candidate,
            user_message=command.user_message,
            is_official=command.is_official,
            auto_run={check.name: False for check in self.registry.checks},
        )
