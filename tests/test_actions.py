#!/usr/bin/env python3
"""
Tests for actions, action sequences, callback chains and default values.
"""
import collections.abc
import typing
from typing import Optional


import pytest


from substitute import Accessor, ConfigurationError, Invocation, Member, MemberKind, Ref, make_configs
from substitute.actions import (
    ActionEngine,
    ActionSequence,
    Callback,
    CompositeAction,
    DoNothing,
    OutputWrite,
    ReturnComputed,
    ReturnConstant,
    ReturnSequence,
    SideEffect,
    ThrowError,
    canonical_empty,
)
from substitute.surface import Direction, Param
from ._calculator import IHistory


ADD = Member(
    name="add",
    params=(Param(name="a", annotation=int), Param(name="b", annotation=int)),
    returns=int,
)
DIVIDE = Member(
    name="divide",
    params=(
        Param(name="n", annotation=int),
        Param(name="divisor", annotation=int),
        Param(name="remainder", annotation=float, direction=Direction.OUT),
    ),
    returns=int,
)


@pytest.fixture
def add_call():
    return Invocation(ADD, Accessor.CALL, (1, 2))


@pytest.fixture
def divide_call():
    return Invocation(DIVIDE, Accessor.CALL, (12, 5, 0.0), {2: Ref(0.0)})


class TestSimpleActions:

    def test_when_computed_then_function_sees_arguments(self, add_call):
        """
        GIVEN ReturnComputed adding the call's arguments
        WHEN executed for add(1, 2)
        THEN 3 is returned
        """
        EXPECTED = 3
        action = ReturnComputed(lambda call: call[0] + call[1])

        result = action.execute(add_call)

        assert result == EXPECTED, f"Expected {EXPECTED}, got {result}"

    @pytest.mark.parametrize(
        "error",
        [RuntimeError("boom"), RuntimeError, lambda call: RuntimeError(f"boom {call[0]}")],
        ids=["instance", "class", "factory"]
    )
    def test_when_throw_is_executed_then_error_is_raised(self, add_call, error):
        """
        GIVEN ThrowError with an instance, a class or a factory
        WHEN executed
        THEN a RuntimeError is raised
        """
        action = ThrowError(error)

        with pytest.raises(RuntimeError):
            action.execute(add_call)

    def test_when_error_factory_returns_non_exception_then_type_error_is_raised(self, add_call):
        """
        GIVEN ThrowError whose factory returns a string
        WHEN executed
        THEN TypeError is raised
        """
        action = ThrowError(lambda call: "not an error")

        with pytest.raises(TypeError, match="not an exception"):
            action.execute(add_call)

    def test_when_side_effect_is_not_callable_then_type_error_is_raised(self):
        """
        GIVEN a non-callable callback
        WHEN building SideEffect
        THEN TypeError is raised
        """
        with pytest.raises(TypeError):
            SideEffect(3)

    def test_when_output_write_runs_then_slot_holds_value(self, divide_call):
        """
        GIVEN OutputWrite for position 2
        WHEN executed for a divide call
        THEN the remainder slot holds the value
        """
        EXPECTED = 0.4

        OutputWrite({2: EXPECTED}).execute(divide_call)

        assert divide_call.slot(2).value == EXPECTED, f"Expected {EXPECTED}, got {divide_call.slot(2).value}"

    def test_when_composite_runs_then_effects_precede_result(self, divide_call):
        """
        GIVEN a composite writing the remainder and computing from it
        WHEN executed
        THEN the computed result sees the written remainder
        """
        EXPECTED = 0.4
        action = CompositeAction([OutputWrite({2: EXPECTED})], ReturnComputed(lambda call: call[2]))

        result = action.execute(divide_call)

        assert result == EXPECTED, f"Expected {EXPECTED}, got {result}"


class TestActionSequence:

    def test_when_sequence_is_exhausted_then_last_value_repeats(self, add_call):
        """
        GIVEN ReturnSequence(10, 20, 30)
        WHEN executed five times
        THEN the results are 10, 20, 30, 30, 30
        """
        EXPECTED = [10, 20, 30, 30, 30]
        sequence = ReturnSequence([10, 20, 30])

        results = [sequence.execute(add_call) for _ in range(len(EXPECTED))]

        assert results == EXPECTED, f"Expected {EXPECTED}, got {results}"

    def test_when_sequence_has_terminal_then_terminal_runs_after_steps(self, add_call):
        """
        GIVEN a sequence of one value with a DoNothing terminal
        WHEN executed twice
        THEN the second result is None
        """
        sequence = ActionSequence([ReturnConstant(1)], terminal=DoNothing())
        sequence.execute(add_call)

        result = sequence.execute(add_call)

        assert result is None, f"Expected None, got {result!r}"

    def test_when_return_sequence_is_empty_then_value_error_is_raised(self):
        """
        GIVEN no values
        WHEN building ReturnSequence
        THEN ValueError is raised
        """
        with pytest.raises(ValueError):
            ReturnSequence([])

    def test_when_step_is_appended_then_it_runs_after_existing_steps(self, add_call):
        """
        GIVEN ReturnSequence(1) with ReturnConstant(2) appended
        WHEN executed three times
        THEN the results are 1, 2, 2
        """
        EXPECTED = [1, 2, 2]
        sequence = ReturnSequence([1])
        sequence.append(ReturnConstant(2))

        results = [sequence.execute(add_call) for _ in range(len(EXPECTED))]

        assert results == EXPECTED, f"Expected {EXPECTED}, got {results}"


class TestCallback:

    def test_when_steps_run_out_then_nothing_happens(self, add_call):
        """
        GIVEN Callback.first(record)
        WHEN executed three times
        THEN the step ran once
        """
        EXPECTED = ["first"]
        steps = []
        callback = Callback.first(lambda call: steps.append("first"))

        for _ in range(3):
            callback.execute(add_call)

        assert steps == EXPECTED, f"Expected {EXPECTED}, got {steps}"

    def test_when_step_throws_then_and_always_still_runs(self, add_call):
        """
        GIVEN Callback.first_throw(...).and_always(record)
        WHEN executed once
        THEN the error propagates and the always callback ran
        """
        always = []
        callback = Callback.first_throw(RuntimeError).and_always(lambda call: always.append(call))

        with pytest.raises(RuntimeError):
            callback.execute(add_call)

        assert always == [add_call], f"Expected the always callback to run once, got {always}"

    def test_when_always_throw_is_used_then_every_call_raises(self, add_call):
        """
        GIVEN Callback.always_throw(RuntimeError)
        WHEN executed a second time
        THEN RuntimeError is raised again
        """
        callback = Callback.always_throw(RuntimeError)
        with pytest.raises(RuntimeError):
            callback.execute(add_call)

        with pytest.raises(RuntimeError):
            callback.execute(add_call)

    def test_when_then_follows_keep_doing_then_configuration_error_is_raised(self):
        """
        GIVEN a chain closed with then_keep_doing
        WHEN adding another step
        THEN ConfigurationError is raised
        """
        callback = Callback.always(lambda call: None)

        with pytest.raises(ConfigurationError):
            callback.then(lambda call: None)

    def test_when_keep_throwing_ends_chain_then_calls_after_steps_raise(self, add_call):
        """
        GIVEN Callback.first(no-op).then_keep_throwing(ValueError)
        WHEN executed twice
        THEN the second call raises ValueError
        """
        callback = Callback.first(lambda call: None).then_keep_throwing(ValueError)
        callback.execute(add_call)

        with pytest.raises(ValueError):
            callback.execute(add_call)


class TestCanonicalEmpty:

    @pytest.mark.parametrize(
        "annotation, expected",
        [
            (int, 0),
            (float, 0.0),
            (bool, False),
            (str, ""),
            (bytes, b""),
            (list[int], []),
            (dict[str, int], {}),
            (tuple, ()),
            (collections.abc.Iterable[int], []),
            (collections.abc.Sequence[int], []),
            (collections.abc.Mapping, {}),
            (None, None),
            (Optional[int], None),
            (object, None),
        ],
        ids=[
            "int", "float", "bool", "str", "bytes", "list", "dict", "tuple",
            "iterable", "sequence", "mapping", "none", "optional", "object",
        ]
    )
    def test_when_type_is_given_then_canonical_empty_value_is_returned(self, annotation, expected):
        """
        GIVEN a declared type
        WHEN asking for its canonical empty value
        THEN the zero or empty value of that type is returned
        """
        result = canonical_empty(annotation)

        assert result == expected and type(result) is type(expected), \
            f"Expected {expected!r} for {annotation!r}, got {result!r}"

    @pytest.mark.parametrize(
        "annotation",
        [typing.Iterator[int], collections.abc.Iterator, typing.Generator[int, None, None]],
        ids=["typing_iterator", "abc_iterator", "generator"]
    )
    def test_when_type_is_an_iterator_then_exhausted_iterator_is_returned(self, annotation):
        """
        GIVEN an iterator or generator return type
        WHEN asking for its canonical empty value
        THEN an iterator that is already exhausted is returned
        """
        SENTINEL = "done"

        result = canonical_empty(annotation)

        assert next(result, SENTINEL) == SENTINEL, f"Expected an exhausted iterator for {annotation!r}, got {result!r}"


class TestActionEngine:

    def test_when_member_returns_surface_then_nested_factory_is_used(self):
        """
        GIVEN a property typed with a Protocol
        WHEN asking the engine for its default
        THEN the nested factory's result is returned
        """
        NESTED = object()
        engine = ActionEngine(configs=make_configs())
        member = Member(name="history", kind=MemberKind.PROPERTY, returns=IHistory)

        result = engine.default_for(Invocation(member, Accessor.GET, ()), lambda member, returns: NESTED)

        assert result is NESTED, f"Expected the nested substitute, got {result!r}"

    def test_when_nested_substitutes_are_disabled_then_none_is_returned(self):
        """
        GIVEN AUTO_SUBSTITUTE_NESTED disabled
        WHEN asking for the default of a Protocol-typed property
        THEN None is returned
        """
        engine = ActionEngine(configs=make_configs({"AUTO_SUBSTITUTE_NESTED": False}))
        member = Member(name="history", kind=MemberKind.PROPERTY, returns=IHistory)

        result = engine.default_for(Invocation(member, Accessor.GET, ()), lambda member, returns: object())

        assert result is None, f"Expected None, got {result!r}"


if __name__ == "__main__":
    pytest.main([__file__])
