"""
Error handling policies for AsyncQueue.

Failures inside a run (a hook raising, an operation or callback rejecting)
never propagate out of begin(). Instead the engine hands them to an
ErrorPolicy, which decides how they are reported and recorded.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List
import sys

from .errors import ExpansionFailure


class ErrorPolicy(ABC):
    """
    Base class for error handling policies.

    Subclasses implement different strategies for reporting failures
    that occur while a run is expanding.
    """

    @abstractmethod
    async def handle(self, failure: ExpansionFailure) -> None:
        """
        Handle a failure isolated inside a run.

        Args:
            failure: HookFailure or BranchFailure describing the step that
                failed. The original exception is available as
                ``failure.error`` (and ``failure.__cause__``).
        """
        pass


def _failure_record(failure: ExpansionFailure) -> Dict[str, Any]:
    """Build the dictionary stored for each handled failure."""
    task = failure.task
    error = failure.error if failure.error is not None else failure
    return {
        'stage': failure.stage,
        'kind': failure.kind,
        'layer': getattr(task, 'layer', None),
        'source_args': getattr(task, 'source_args', None),
        'error': error,
        'error_type': type(error).__name__,
        'error_message': str(error),
    }


class ContinueOnErrorsPolicy(ErrorPolicy):
    """
    Policy that reports failures and lets the run continue.

    This is the default. Failures are collected for later inspection
    and, when verbose, a warning line is written to stderr.
    """

    def __init__(self, verbose: bool = True):
        """
        Initialize the policy.

        Args:
            verbose: If True, print warnings to stderr when failures occur
        """
        self.errors: List[Dict[str, Any]] = []
        self.verbose = verbose

    async def handle(self, failure: ExpansionFailure) -> None:
        record = _failure_record(failure)
        self.errors.append(record)

        if self.verbose:
            if failure.kind == 'hook':
                print(f"\nWARNING: Failed updating the data map using {failure.stage} "
                      f"(args {record['source_args']!r}): {record['error_message']}",
                      file=sys.stderr)
            else:
                print(f"\nWARNING: AsyncQueue {failure.stage} failed at layer {record['layer']} "
                      f"(args {record['source_args']!r}), abandoning branch: {record['error_message']}",
                      file=sys.stderr)

    def get_statistics(self) -> dict:
        """
        Get statistics about failures encountered.

        Returns:
            Dictionary with failure counts and details
        """
        return {
            'total_errors': len(self.errors),
            'hook_failures': sum(1 for e in self.errors if e['kind'] == 'hook'),
            'branch_failures': sum(1 for e in self.errors if e['kind'] == 'branch'),
            'errors': self.errors,
        }


class CollectErrorsPolicy(ContinueOnErrorsPolicy):
    """
    Policy that collects all failures without printing anything.

    Useful for batch processing where failures are inspected at the end.
    """

    def __init__(self):
        super().__init__(verbose=False)
