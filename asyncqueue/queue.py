"""AsyncQueue: the public entry point.

Seed tasks are enqueued first, then ``begin()`` expands them. Elements are
only retired after their callbacks return, which gives an ordering roughly
resembling breadth-first search.

Example:
    >>> queue = AsyncQueue(2)
    >>> queue.enqueue_all(fetch, [[0], [50], [100]], lambda e: e, lambda e: [[e + 1]])
    >>> result = await queue.begin()
    >>> sorted(result['all'])
    [0, 1, 2, 50, 51, 52, 100, 101, 102]
"""

import warnings
from typing import Any, Callable, Dict, List, Optional, Sequence

from .aggregator import RunState, empty_result
from .config import QueueConfig
from .engine import ExpansionEngine
from .error_policies import ContinueOnErrorsPolicy, ErrorPolicy
from .errors import InvalidArgument, LimitExceeded
from .task import Task, is_argument_list


class AsyncQueue:
    """Asynchronous task-expansion queue.

    Accepts one of:
        AsyncQueue(max_depth)
        AsyncQueue(max_depth, max_results)
        AsyncQueue({'max_depth': 3, 'short_circuit': pred, ...})
        AsyncQueue(QueueConfig(...))
        AsyncQueue(max_depth=3, collect_transformed_data=hook, ...)

    The ``error_policy`` keyword selects how isolated failures are reported
    (ContinueOnErrorsPolicy by default).
    """

    def __init__(self, *args, error_policy: Optional[ErrorPolicy] = None, **options):
        self.config = QueueConfig.from_args(*args, **options)
        self.error_policy = error_policy or ContinueOnErrorsPolicy()
        self._pending: List[Task] = []
        self._admitted = 0

    @property
    def admitted(self) -> int:
        """Number of seed tasks admitted for the next run."""
        return self._admitted

    @property
    def pending(self) -> int:
        """Number of seed tasks waiting for ``begin()``."""
        return len(self._pending)

    def enqueue(
        self,
        operation_factory: Callable[..., Any],
        args: Sequence[Any],
        callback: Optional[Callable[[Any], Any]] = None,
        requeue: Optional[Callable[[Any], Any]] = None,
    ) -> None:
        """Admit one seed task at layer 0.

        Args:
            operation_factory: Called as ``operation_factory(*args)``; returns
                an awaitable (or a plain value)
            args: Argument list (list or tuple)
            callback: Transforms the raw value; identity if None
            requeue: Derives next-layer terms from the transformed value;
                the task never requeues if None

        Raises:
            InvalidArgument: if the factory, args or hooks have the wrong shape
            LimitExceeded: if max_results tasks are already admitted
        """
        errors = []
        if not callable(operation_factory):
            errors.append("operation_factory must be a callable returning an awaitable")
        if not is_argument_list(args):
            errors.append(f"args must be a list or tuple of arguments, got {type(args).__name__}")
        if callback is not None and not callable(callback):
            errors.append("callback must be callable")
        if requeue is not None and not callable(requeue):
            errors.append("requeue must be callable")
        if errors:
            raise InvalidArgument(errors)

        if not self.config.allows_admission(self._admitted):
            raise LimitExceeded(self.config.max_results)

        task = Task(layer=0, operation_factory=operation_factory, source_args=tuple(args))
        if callback is not None:
            task.callback = callback
        if requeue is not None:
            task.requeue = requeue
        self._pending.append(task)
        self._admitted += 1

    def enqueue_all(
        self,
        operation_factory: Callable[..., Any],
        args_list: Sequence[Sequence[Any]],
        callback: Optional[Callable[[Any], Any]] = None,
        requeue: Optional[Callable[[Any], Any]] = None,
    ) -> None:
        """Enqueue one seed task per argument list, sharing callback and requeue."""
        if not is_argument_list(args_list):
            raise InvalidArgument(
                f"args_list must be a list or tuple of argument lists, got {type(args_list).__name__}"
            )
        for args in args_list:
            self.enqueue(operation_factory, args, callback, requeue)

    async def begin(self) -> Dict[str, Any]:
        """Run the expansion over every pending seed task.

        Returns:
            Dictionary with ``all`` (values in completion order) and
            ``by_layer`` (values grouped by layer), plus
            ``transformed_data_map`` / ``requeue_terms_map`` when the
            corresponding hooks populated them. Empty entries are omitted.
        """
        if self.config.yields_nothing:
            warnings.warn(
                "Either a max_results or max_depth value of 0 was provided to AsyncQueue, "
                "meaning no results will be returned.",
                UserWarning,
                stacklevel=2,
            )
            self._pending = []
            self._admitted = 0
            return empty_result()

        seeds, self._pending = self._pending, []
        state = RunState(admitted=self._admitted)
        self._admitted = 0

        engine = ExpansionEngine(self.config, self.error_policy, state)
        return await engine.run(seeds)

    def __repr__(self) -> str:
        return f"AsyncQueue({self.config!r}, pending={self.pending})"
