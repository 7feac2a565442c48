"""Tasks and requeue terms.

A Task is one unit of pending work: the operation to run, the callback that
transforms its raw value, the requeue deriver producing the next generation's
arguments, and where it came from (its argument list and layer).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, List, Sequence, Tuple, Union


ArgumentList = Tuple[Any, ...]


def _identity(value: Any) -> Any:
    return value


def _no_requeue(value: Any) -> None:
    return None


def is_argument_list(value: Any) -> bool:
    """Argument lists are lists or tuples; strings and bytes are scalars."""
    return isinstance(value, (list, tuple))


@dataclass(eq=False)
class Task:
    """A unit of pending work owned by the expansion engine.

    Tasks compare by identity so they can live in the engine's live set.
    """

    layer: int
    operation_factory: Callable[..., Any]
    source_args: ArgumentList
    callback: Callable[[Any], Any] = _identity
    requeue: Callable[[Any], Any] = _no_requeue

    def operation(self) -> Union[Awaitable[Any], Any]:
        """Invoke the operation factory with this task's arguments."""
        return self.operation_factory(*self.source_args)

    def spawn(self, args: ArgumentList) -> 'Task':
        """Create the next-layer task for one requeue term."""
        return Task(
            layer=self.layer + 1,
            operation_factory=self.operation_factory,
            source_args=args,
            callback=self.callback,
            requeue=self.requeue,
        )

    def __repr__(self) -> str:
        name = getattr(self.operation_factory, '__name__', repr(self.operation_factory))
        return f"Task(layer={self.layer}, {name}{self.source_args!r})"


class RequeueTerms(ABC):
    """What a requeue deriver produced, discriminated once.

    Use :meth:`from_value` to turn whatever the deriver returned into one of
    :class:`Empty`, :class:`Single` or :class:`Many`.
    """

    @abstractmethod
    def argument_lists(self) -> List[ArgumentList]:
        """Normalized ordered argument lists for next-layer tasks."""
        pass

    @staticmethod
    def from_value(value: Any) -> 'RequeueTerms':
        if value is None:
            return Empty()
        if is_argument_list(value):
            if len(value) == 0:
                return Empty()
            return Many(list(value))
        return Single(value)


@dataclass
class Empty(RequeueTerms):
    """No follow-up tasks."""

    def argument_lists(self) -> List[ArgumentList]:
        return []


@dataclass
class Single(RequeueTerms):
    """A lone scalar; becomes one single-argument task."""

    value: Any

    def argument_lists(self) -> List[ArgumentList]:
        return [(self.value,)]


@dataclass
class Many(RequeueTerms):
    """A sequence of terms, each an argument list or a scalar."""

    terms: Sequence[Any] = field(default_factory=list)

    def argument_lists(self) -> List[ArgumentList]:
        return [
            tuple(term) if is_argument_list(term) else (term,)
            for term in self.terms
        ]
