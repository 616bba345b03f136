"""Job ordering and gating derived from the check registry.

Every check becomes one job that needs the trigger job. Review jobs also
declare ordering edges on every mandatory test job, but whether those tests
must have *succeeded* depends on how the review was fired: only the
collective trigger makes a mandatory review wait for green tests. Its own
trigger, or an auto-run, lets it run regardless of test results.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from graphlib import TopologicalSorter

from src.domain.entities.check_registry import CheckRegistry, PrReviewCheck, PrTestCheck
from src.domain.value_objects.check_types import CheckCategory
from src.domain.value_objects.commit_status import CommitState
from src.domain.value_objects.decision import Decision

TRIGGER_JOB = "check-trigger"
GATE_JOB = "review-status"


class PassPredicate(str, Enum):
    MUST_SUCCEED = "must_succeed"
    MUST_COMPLETE = "must_complete"

    def is_satisfied(self, state: CommitState) -> bool:
        if self is PassPredicate.MUST_SUCCEED:
            return state == CommitState.SUCCESS
        return state not in (CommitState.NONE, CommitState.PENDING)


def pass_predicate(check: PrTestCheck | PrReviewCheck) -> PassPredicate:
    return PassPredicate.MUST_SUCCEED if check.must_pass else PassPredicate.MUST_COMPLETE


class JobResult(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    CANCELLED = "cancelled"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class JobPlan:
    name: str
    needs: tuple[str, ...] = ()
    category: CheckCategory | None = None
    triggers: frozenset[str] = frozenset()
    collective_prerequisites: tuple[str, ...] = ()
    predicate: PassPredicate | None = None

    @property
    def is_check(self) -> bool:
        return self.category is not None

    def fires_on(self, decision: Decision) -> bool:
        if not decision.should_continue:
            return False
        if not self.is_check:
            return True
        return decision.fired_trigger in self.triggers or decision.auto_runs(self.name)

    def prerequisites_for(self, decision: Decision, collective_trigger: str) -> tuple[str, ...]:
        """Jobs that must have succeeded for this job to run under this decision."""
        if decision.fired_trigger == collective_trigger:
            return self.collective_prerequisites
        return ()

    @staticmethod
    def reports_status(decision: Decision) -> bool:
        """Only official runs write the per-check commit status."""
        return decision.is_official


@dataclass(frozen=True)
class JobGraph:
    collective_trigger: str
    jobs: tuple[JobPlan, ...] = field(default_factory=tuple)

    def get(self, name: str) -> JobPlan:
        for job in self.jobs:
            if job.name == name:
                return job
        raise KeyError(name)

    def check_jobs(self) -> list[JobPlan]:
        return [j for j in self.jobs if j.is_check]

    def topological_order(self) -> list[str]:
        sorter: TopologicalSorter[str] = TopologicalSorter()
        for job in self.jobs:
            sorter.add(job.name, *job.needs)
        return list(sorter.static_order())

    def should_run(
        self,
        name: str,
        decision: Decision,
        upstream: Mapping[str, JobResult] | None = None,
    ) -> bool:
        """Evaluate a job's run condition once its needs have settled."""
        job = self.get(name)
        if not job.fires_on(decision):
            return False
        results = upstream or {}
        return all(
            results.get(required) == JobResult.SUCCESS
            for required in job.prerequisites_for(decision, self.collective_trigger)
        )

    def select(
        self,
        decision: Decision,
        upstream: Mapping[str, JobResult] | None = None,
    ) -> list[str]:
        """Names of the check jobs a decision starts, in dependency order."""
        order = self.topological_order()
        return [
            name
            for name in order
            if self.get(name).is_check and self.should_run(name, decision, upstream)
        ]


def build_job_graph(registry: CheckRegistry) -> JobGraph:
    collective = registry.collective_trigger
    mandatory_tests = tuple(c.name for c in registry.test_checks() if c.must_run)

    jobs: list[JobPlan] = [JobPlan(name=TRIGGER_JOB)]
    for check in registry.checks:
        triggers = {check.trigger}
        if check.must_run:
            triggers.add(collective)

        needs: tuple[str, ...] = (TRIGGER_JOB,)
        prerequisites: tuple[str, ...] = ()
        if isinstance(check, PrReviewCheck):
            needs += mandatory_tests
            if check.must_run:
                prerequisites = mandatory_tests

        jobs.append(
            JobPlan(
                name=check.name,
                needs=needs,
                category=check.category,
                triggers=frozenset(triggers),
                collective_prerequisites=prerequisites,
                predicate=pass_predicate(check),
            )
        )

    jobs.append(
        JobPlan(name=GATE_JOB, needs=(TRIGGER_JOB, *(c.name for c in registry.checks)))
    )
    return JobGraph(collective_trigger=collective, jobs=tuple(jobs))
