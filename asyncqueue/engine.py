"""Expansion engine.

Drives the depth- and count-bounded expansion of tasks. Every task runs as
its own asyncio task; when one completes, the tasks derived from its value
are launched right away, so execution is only roughly breadth-first. Layer
numbers keep grouping and depth cutoff exact regardless of timing.

The run resolves when the live set drains or when a short-circuit predicate
fires, whichever comes first. Resolution happens at most once.
"""

import asyncio
import inspect
import sys
from typing import Any, Dict, List, Optional, Set

from .aggregator import RunState, empty_result
from .config import QueueConfig
from .error_policies import ContinueOnErrorsPolicy, ErrorPolicy
from .errors import BranchFailure, ExpansionFailure, HookFailure
from .task import RequeueTerms, Task


# Strong references to in-flight steps. The event loop only keeps weak ones,
# and short-circuited runs return while stragglers are still running.
_background_steps: Set[asyncio.Future] = set()


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def _attach_source_args(value: Any, source_args: tuple) -> None:
    """Record provenance on values that accept attributes."""
    if not hasattr(value, '__dict__') or hasattr(value, '_source_args'):
        return
    try:
        value._source_args = source_args
    except (AttributeError, TypeError):
        # Frozen or slotted objects keep no provenance
        pass


class ExpansionEngine:
    """Runs one expansion over a set of seed tasks.

    An engine owns its RunState exclusively and is used for a single run.
    """

    def __init__(
        self,
        config: QueueConfig,
        error_policy: Optional[ErrorPolicy] = None,
        state: Optional[RunState] = None,
    ):
        """Initialize engine.

        Args:
            config: Limits and hooks for the run
            error_policy: Receives isolated failures (ContinueOnErrorsPolicy if None)
            state: Run state; seeds are expected to be counted in ``admitted``
        """
        self.config = config
        self.error_policy = error_policy or ContinueOnErrorsPolicy()
        self.state = state or RunState()
        self._done: Optional[asyncio.Event] = None
        self._result: Dict[str, Any] = {}

    async def run(self, seeds: List[Task]) -> Dict[str, Any]:
        """Expand the seed tasks until the run resolves.

        Returns:
            Snapshot of the accumulated results at resolution time
        """
        if not seeds:
            return empty_result()

        self._done = asyncio.Event()
        self._launch(seeds)
        await self._done.wait()
        return self._result

    @property
    def resolved(self) -> bool:
        return self.state.resolved

    def _launch(self, tasks: List[Task]) -> None:
        for task in tasks:
            self.state.live.add(task)
            step = asyncio.ensure_future(self._settle(task))
            _background_steps.add(step)
            step.add_done_callback(_background_steps.discard)

    def _resolve(self) -> None:
        if self.state.resolved:
            return
        self.state.resolved = True
        self._result = self.state.results.get_result()
        self._done.set()

    async def _settle(self, task: Task) -> None:
        """Run one task's step, then launch its children or finish the run."""
        children: List[Task] = []
        try:
            children = await self._step(task)
        finally:
            self.state.live.discard(task)
            if not self.state.resolved:
                if children:
                    self._launch(children)
                elif not self.state.live:
                    self._resolve()

    async def _step(self, task: Task) -> List[Task]:
        """Produce, record and expand a single task.

        Returns:
            Newly admitted next-layer tasks (empty if the branch ends here)
        """
        results = self.state.results
        stage = 'operation'
        try:
            raw = await _maybe_await(task.operation())
            stage = 'callback'
            value = await _maybe_await(task.callback(raw))
        except Exception as error:
            await self._report(BranchFailure(stage, task, error))
            return []

        if self.config.collect_transformed_data is not None:
            try:
                results.merge_transformed_data(
                    self.config.collect_transformed_data(value, task.source_args)
                )
            except Exception as error:
                await self._report(HookFailure('collect_transformed_data', task, error))

        _attach_source_args(value, task.source_args)
        results.collect(value, task.layer)

        if not self.config.allows_requeue(task.layer):
            return []

        try:
            terms = await _maybe_await(task.requeue(value))
        except Exception as error:
            await self._report(BranchFailure('requeue', task, error))
            return []

        if self.config.collect_requeue_data is not None:
            try:
                results.merge_requeue_data(
                    self.config.collect_requeue_data(terms, value, task.source_args)
                )
            except Exception as error:
                await self._report(HookFailure('collect_requeue_data', task, error))

        if self.config.short_circuit is not None:
            try:
                fired = await _maybe_await(self.config.short_circuit(value, terms))
            except Exception as error:
                await self._report(BranchFailure('short_circuit', task, error))
                return []
            if fired:
                self._resolve()
                return []

        # Stragglers finishing after an early resolution do not expand
        if self.state.resolved:
            return []

        return self._admit(task, RequeueTerms.from_value(terms))

    def _admit(self, parent: Task, terms: RequeueTerms) -> List[Task]:
        """Spawn next-layer tasks while the result budget allows."""
        children = []
        for args in terms.argument_lists():
            if not self.config.allows_admission(self.state.admitted):
                break
            children.append(parent.spawn(args))
            self.state.admitted += 1
        return children

    async def _report(self, failure: ExpansionFailure) -> None:
        """Hand a failure to the policy; a failing policy cannot stop the run."""
        try:
            await self.error_policy.handle(failure)
        except Exception as policy_error:
            print(f"\nWARNING: {type(self.error_policy).__name__} raised {policy_error!r} "
                  f"while handling {failure}", file=sys.stderr)
