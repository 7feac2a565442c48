"""AsyncQueue - Asynchronous Task-Expansion Library.

AsyncQueue runs a set of seed operations, lets every produced value derive
follow-up operations, and repeats the expansion up to a bounded depth or a
bounded number of operations, collecting every value along the way.

Quick start:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from asyncqueue import AsyncQueue

    queue = AsyncQueue(max_depth=2)
    queue.enqueue_all(fetch, [[0], [50]], transform, derive_next)
    result = await queue.begin()
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

__version__ = "0.1.0"

from .config import QueueConfig, OPTION_SCHEMA
from .errors import (
    AsyncQueueError,
    InvalidArgument,
    LimitExceeded,
    ExpansionFailure,
    HookFailure,
    BranchFailure,
)
from .error_policies import (
    ErrorPolicy,
    ContinueOnErrorsPolicy,
    CollectErrorsPolicy,
)
from .task import Task, RequeueTerms, Empty, Single, Many
from .aggregator import ResultAggregator, RunState
from .engine import ExpansionEngine
from .queue import AsyncQueue
from .api import expand, values_by_layer

__all__ = [
    "__version__",
    # Entry point
    "AsyncQueue",
    # Configuration
    "QueueConfig",
    "OPTION_SCHEMA",
    # Errors
    "AsyncQueueError",
    "InvalidArgument",
    "LimitExceeded",
    "ExpansionFailure",
    "HookFailure",
    "BranchFailure",
    # Error policies
    "ErrorPolicy",
    "ContinueOnErrorsPolicy",
    "CollectErrorsPolicy",
    # Building blocks
    "Task",
    "RequeueTerms",
    "Empty",
    "Single",
    "Many",
    "ResultAggregator",
    "RunState",
    "ExpansionEngine",
    # High-level API
    "expand",
    "values_by_layer",
]
