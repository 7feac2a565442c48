"""Configuration system for AsyncQueue.

This module defines how users specify the limits and optional hooks that
govern one expansion run. A configuration can be built from a single depth
bound, a depth bound plus a result bound, or a set of named options.
"""

from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from .errors import InvalidArgument


# Recognized option names and the kind of value each one expects.
OPTION_SCHEMA: Dict[str, str] = {
    'max_depth': 'bound',
    'max_results': 'bound',
    'collect_transformed_data': 'hook',
    'collect_requeue_data': 'hook',
    'short_circuit': 'hook',
}

# Spellings accepted for compatibility with camelCase configuration objects.
OPTION_ALIASES: Dict[str, str] = {
    'maxDepth': 'max_depth',
    'maxResults': 'max_results',
    'collectTransformedData': 'collect_transformed_data',
    'collectRequeueData': 'collect_requeue_data',
    'shortCircuit': 'short_circuit',
}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class QueueConfig:
    """Complete configuration for one expansion run.

    ``None`` for either bound means unbounded. Hooks are optional:

    - ``collect_transformed_data(value, source_args)`` returns a mapping
      merged into the run's ``transformed_data_map``.
    - ``collect_requeue_data(terms, value, source_args)`` returns a mapping
      merged into the run's ``requeue_terms_map``.
    - ``short_circuit(value, terms)`` ends the run early when it returns true.

    Instances are immutable, so one configuration can drive any number of
    independent runs.
    """

    max_depth: Optional[int] = None
    max_results: Optional[int] = None
    collect_transformed_data: Optional[Callable[[Any, Tuple], Optional[Mapping]]] = None
    collect_requeue_data: Optional[Callable[[Any, Any, Tuple], Optional[Mapping]]] = None
    short_circuit: Optional[Callable[[Any, Any], bool]] = None

    def validate(self) -> List[str]:
        """Validate configuration values against the option schema.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []
        for name, kind in OPTION_SCHEMA.items():
            value = getattr(self, name)
            if value is None:
                continue
            if kind == 'bound':
                if not _is_int(value):
                    errors.append(f"{name} must be an integer or None, got {type(value).__name__}")
                elif value < 0:
                    errors.append(f"{name} cannot be negative")
            elif not callable(value):
                errors.append(f"{name} must be callable, got {type(value).__name__}")
        return errors

    @property
    def yields_nothing(self) -> bool:
        """True when the bounds make every run empty."""
        return self.max_depth == 0 or self.max_results == 0

    def allows_requeue(self, layer: int) -> bool:
        """Check if a task at this layer may derive follow-up tasks."""
        return self.max_depth is None or layer < self.max_depth

    def allows_admission(self, admitted: int) -> bool:
        """Check if another task may be admitted after ``admitted`` tasks."""
        return self.max_results is None or admitted < self.max_results

    def options(self) -> Dict[str, Any]:
        """Return the options that differ from their defaults."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    @classmethod
    def from_options(cls, items: Iterable[Tuple[str, Any]]) -> 'QueueConfig':
        """Build a configuration from ``(name, value)`` pairs.

        Every pair is checked in a single pass; unknown names, options given
        more than once and ill-typed values are all reported together.

        Raises:
            InvalidArgument: if any pair is invalid
        """
        errors = []
        resolved: Dict[str, Any] = {}
        seen: Dict[str, str] = {}

        for raw_name, value in items:
            name = OPTION_ALIASES.get(raw_name, raw_name)
            if name not in OPTION_SCHEMA:
                errors.append(f"unexpected option {raw_name!r}")
                continue
            if name in seen:
                errors.append(f"option {name!r} supplied more than once "
                              f"(as {seen[name]!r} and {raw_name!r})")
                continue
            seen[name] = raw_name
            resolved[name] = value

        config = cls(**resolved)
        errors.extend(config.validate())
        if errors:
            raise InvalidArgument(errors)
        return config

    @classmethod
    def from_args(cls, *args, **kwargs) -> 'QueueConfig':
        """Build a configuration from any accepted constructor shape.

        Accepted shapes:
            QueueConfig.from_args(3)                    # max_depth
            QueueConfig.from_args(3, 10)                # max_depth, max_results
            QueueConfig.from_args({'max_depth': 3})     # option mapping
            QueueConfig.from_args(existing_config)
            QueueConfig.from_args(max_depth=3, short_circuit=pred)

        Raises:
            InvalidArgument: if no arguments are given or the shape is invalid
        """
        if not args and not kwargs:
            raise InvalidArgument(
                "no arguments provided; an AsyncQueue without limits would expand forever"
            )
        if args and kwargs:
            raise InvalidArgument(
                f"positional arguments cannot be combined with keyword options "
                f"({', '.join(sorted(kwargs))}); pass a single depth, a depth and "
                f"a result bound, or one configuration"
            )

        if kwargs:
            return cls.from_options(kwargs.items())

        pairs: List[Tuple[str, Any]] = []
        if len(args) == 1:
            arg = args[0]
            if isinstance(arg, QueueConfig):
                pairs.extend(arg.options().items())
            elif isinstance(arg, Mapping):
                pairs.extend(arg.items())
            elif _is_int(arg):
                pairs.append(('max_depth', arg))
            else:
                raise InvalidArgument(
                    f"received invalid argument of type {type(arg).__name__}; "
                    f"expected one integer, two integers or a configuration"
                )
        elif len(args) == 2:
            if not (_is_int(args[0]) and _is_int(args[1])):
                raise InvalidArgument(
                    f"expected two integers, received {type(args[0]).__name__} "
                    f"and {type(args[1]).__name__}"
                )
            pairs.extend([('max_depth', args[0]), ('max_results', args[1])])
        elif len(args) > 2:
            raise InvalidArgument(f"received {len(args)} positional arguments; at most two are accepted")

        return cls.from_options(pairs)
