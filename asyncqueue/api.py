"""High-level API for AsyncQueue.

Simple functions for the common case of expanding a list of seeds in one
call, without managing a queue object.
"""

from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from .error_policies import ErrorPolicy
from .queue import AsyncQueue


async def expand(
    operation_factory: Callable[..., Any],
    seeds: Sequence[Sequence[Any]],
    callback: Optional[Callable[[Any], Any]] = None,
    requeue: Optional[Callable[[Any], Any]] = None,
    error_policy: Optional[ErrorPolicy] = None,
    **options
) -> Dict[str, Any]:
    """Expand seed argument lists and return the collected results.

    Args:
        operation_factory: Async callable invoked as ``operation_factory(*args)``
        seeds: Argument lists for the layer-0 tasks
        callback: Transforms each raw value (identity if None)
        requeue: Derives next-layer terms from each transformed value
        error_policy: How isolated failures are reported
        **options: Configuration options (max_depth, max_results, hooks)

    Returns:
        Result dictionary as returned by ``AsyncQueue.begin()``

    Example:
        >>> result = await expand(fetch_page, [['/']], parse_page,
        ...                       lambda page: page.links, max_depth=2)
    """
    queue = AsyncQueue(error_policy=error_policy, **options)
    queue.enqueue_all(operation_factory, seeds, callback, requeue)
    return await queue.begin()


def values_by_layer(result: Dict[str, Any]) -> Iterator[Tuple[int, List[Any]]]:
    """Yield ``(layer, values)`` pairs in ascending layer order.

    Args:
        result: Dictionary returned by ``begin()`` or :func:`expand`
    """
    by_layer = result.get('by_layer', {})
    for layer in sorted(by_layer):
        yield layer, by_layer[layer]
