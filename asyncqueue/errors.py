"""
Exception types for AsyncQueue.

Only InvalidArgument and LimitExceeded are raised to callers. The
ExpansionFailure family describes failures that happen inside a running
expansion; those are handed to an ErrorPolicy and never escape begin().
"""

from typing import Any, List, Optional


class AsyncQueueError(Exception):
    """Base class for all AsyncQueue errors."""


class InvalidArgument(AsyncQueueError, ValueError):
    """Raised when a constructor or enqueue call receives a bad shape.

    All violations found during validation are reported together.
    """

    def __init__(self, errors):
        if isinstance(errors, str):
            errors = [errors]
        self.errors: List[str] = list(errors)
        super().__init__(f"Invalid configuration: {'; '.join(self.errors)}")


class LimitExceeded(AsyncQueueError):
    """Raised when enqueue is attempted after max_results tasks were admitted."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(
            f"Number of tasks enqueued exceeds the maximum results. Limit was set to {limit}."
        )


class ExpansionFailure(AsyncQueueError):
    """A failure isolated inside a run.

    Attributes:
        stage: Step that failed (e.g. 'operation', 'collect_requeue_data')
        task: The Task being processed when the failure happened
    """

    kind = "expansion"

    def __init__(self, stage: str, task: Optional[Any] = None, error: Optional[BaseException] = None):
        self.stage = stage
        self.task = task
        self.error = error
        layer = getattr(task, 'layer', None)
        message = f"{stage} failed"
        if layer is not None:
            message += f" at layer {layer}"
        if error is not None:
            message += f": {error}"
        super().__init__(message)
        self.__cause__ = error


class HookFailure(ExpansionFailure):
    """A collect_transformed_data / collect_requeue_data hook failed.

    The affected map entry is simply not added; the branch continues.
    """

    kind = "hook"


class BranchFailure(ExpansionFailure):
    """An operation, callback, requeue or short-circuit step failed.

    The branch is abandoned and produces no further tasks.
    """

    kind = "branch"
