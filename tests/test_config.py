"""Tests for QueueConfig construction and validation."""

import dataclasses

import pytest

from asyncqueue import AsyncQueue, InvalidArgument, QueueConfig, OPTION_SCHEMA


def noop(*args):
    return None


class TestConstructionShapes:
    """Each accepted constructor shape produces the right configuration."""

    def test_single_depth(self):
        config = QueueConfig.from_args(3)
        assert config.max_depth == 3
        assert config.max_results is None

    def test_depth_and_results(self):
        config = QueueConfig.from_args(3, 10)
        assert config.max_depth == 3
        assert config.max_results == 10

    def test_option_mapping(self):
        config = QueueConfig.from_args({
            'max_depth': 2,
            'collect_transformed_data': noop,
            'short_circuit': noop,
        })
        assert config.max_depth == 2
        assert config.collect_transformed_data is noop
        assert config.short_circuit is noop
        assert config.collect_requeue_data is None

    def test_camel_case_aliases(self):
        config = QueueConfig.from_args({'maxDepth': 4, 'maxResults': 7, 'collectRequeueData': noop})
        assert config.max_depth == 4
        assert config.max_results == 7
        assert config.collect_requeue_data is noop

    def test_keyword_options(self):
        config = QueueConfig.from_args(max_depth=1, max_results=5)
        assert (config.max_depth, config.max_results) == (1, 5)

    def test_existing_config(self):
        original = QueueConfig(max_depth=2, short_circuit=noop)
        config = QueueConfig.from_args(original)
        assert config == original

    def test_queue_uses_same_shapes(self):
        assert AsyncQueue(5).config.max_depth == 5
        assert AsyncQueue(5, 6).config.max_results == 6
        assert AsyncQueue({'maxDepth': 1}).config.max_depth == 1
        assert AsyncQueue(max_depth=1).config.max_depth == 1

    def test_config_is_immutable(self):
        config = QueueConfig(max_depth=1)
        with pytest.raises(AttributeError):
            config.max_depth = 2


class TestRejectedShapes:
    """Bad shapes raise InvalidArgument."""

    def test_no_arguments(self):
        with pytest.raises(InvalidArgument):
            QueueConfig.from_args()

    def test_no_arguments_to_queue(self):
        with pytest.raises(InvalidArgument):
            AsyncQueue()

    def test_unrecognized_option(self):
        with pytest.raises(InvalidArgument) as exc_info:
            QueueConfig.from_args({'max_depth': 1, 'maxDeph': 2})
        assert "maxDeph" in str(exc_info.value)

    def test_alias_and_canonical_name_is_duplicate(self):
        with pytest.raises(InvalidArgument) as exc_info:
            QueueConfig.from_args({'max_depth': 1, 'maxDepth': 2})
        assert "more than once" in str(exc_info.value)

    def test_positional_and_keyword_duplicate(self):
        with pytest.raises(InvalidArgument) as exc_info:
            AsyncQueue(3, max_depth=4)
        assert "max_depth" in str(exc_info.value)

    def test_existing_config_cannot_be_extended_by_keywords(self):
        with pytest.raises(InvalidArgument):
            QueueConfig.from_args(QueueConfig(max_depth=2), max_results=9)

    @pytest.mark.parametrize("args,kwargs", [
        ((3,), {'short_circuit': noop}),
        ((3, 10), {'collect_transformed_data': noop}),
        (({'max_depth': 2},), {'max_results': 9}),
    ])
    def test_mixed_shapes_rejected(self, args, kwargs):
        with pytest.raises(InvalidArgument) as exc_info:
            AsyncQueue(*args, **kwargs)
        assert "cannot be combined" in str(exc_info.value)

    def test_non_callable_hook(self):
        with pytest.raises(InvalidArgument) as exc_info:
            QueueConfig.from_args({'max_depth': 1, 'short_circuit': True})
        assert "short_circuit must be callable" in str(exc_info.value)

    def test_non_integer_bound(self):
        with pytest.raises(InvalidArgument):
            QueueConfig.from_args({'max_depth': '3'})

    def test_bool_is_not_a_bound(self):
        with pytest.raises(InvalidArgument):
            QueueConfig.from_args(True)

    def test_negative_bound(self):
        with pytest.raises(InvalidArgument) as exc_info:
            QueueConfig.from_args(-1)
        assert "cannot be negative" in str(exc_info.value)

    def test_wrong_single_type(self):
        with pytest.raises(InvalidArgument):
            QueueConfig.from_args("deep")

    def test_wrong_pair_types(self):
        with pytest.raises(InvalidArgument):
            QueueConfig.from_args(3, "10")

    def test_too_many_positionals(self):
        with pytest.raises(InvalidArgument):
            QueueConfig.from_args(1, 2, 3)

    def test_all_violations_reported_together(self):
        with pytest.raises(InvalidArgument) as exc_info:
            QueueConfig.from_args({
                'bogus': 1,
                'max_results': -5,
                'collect_transformed_data': 42,
            })
        errors = exc_info.value.errors
        assert len(errors) == 3
        assert any("bogus" in e for e in errors)
        assert any("max_results" in e for e in errors)
        assert any("collect_transformed_data" in e for e in errors)

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            QueueConfig.from_args()


class TestConfigHelpers:
    """Bound checks used by the engine."""

    def test_schema_covers_every_field(self):
        assert set(OPTION_SCHEMA) == {f.name for f in dataclasses.fields(QueueConfig)}

    def test_validate_reports_bad_values(self):
        config = QueueConfig(max_depth=-1, short_circuit="yes")
        errors = config.validate()
        assert len(errors) == 2

    def test_validate_accepts_defaults(self):
        assert QueueConfig().validate() == []

    def test_allows_requeue(self):
        config = QueueConfig(max_depth=2)
        assert config.allows_requeue(0)
        assert config.allows_requeue(1)
        assert not config.allows_requeue(2)
        assert QueueConfig().allows_requeue(10_000)

    def test_allows_admission(self):
        config = QueueConfig(max_results=3)
        assert config.allows_admission(2)
        assert not config.allows_admission(3)
        assert QueueConfig().allows_admission(10_000)

    def test_yields_nothing(self):
        assert QueueConfig(max_depth=0).yields_nothing
        assert QueueConfig(max_depth=3, max_results=0).yields_nothing
        assert not QueueConfig(max_depth=3).yields_nothing
        assert not QueueConfig().yields_nothing

    def test_options_omit_defaults(self):
        assert QueueConfig(max_depth=1).options() == {'max_depth': 1}
