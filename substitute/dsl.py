"""
The configuration, verification and query surface of a substitute.

    >>> sub = make_substitute(Calculator)
    >>> sub.on.add(1, 1).returns(2)
    >>> sub.instance.add(1, 1)
    2
    >>> sub.received(1).add(1, Arg.any(int))
"""
import logging
from typing import Any, Callable, Optional


from .actions import (
    Action,
    ActionSequence,
    CompositeAction,
    OutputWrite,
    ReturnComputed,
    ReturnConstant,
    ReturnSequence,
    SideEffect,
    ThrowError,
)
from .adapter import dispatcher_of
from .errors import ArgumentIsNotOutOrRefError, ConfigurationError, VerificationFailure
from .invocation import Accessor, Invocation
from .patterns import CallPattern, build_pattern
from .registry import BindingKind, ExpectationBinding
from .surface import Member, Surface


Finisher = Callable[[Member, Accessor, tuple, dict], Any]


class _PatternProxy:
    """
    Turns member access into a call pattern and hands it to a finisher.

    Methods return a callable taking the pattern arguments. Properties are
    finished on attribute access; assignment finishes a setter pattern.
    """

    def __init__(self, surface: Surface, finish: Finisher, finish_set: Optional[Finisher] = None):
        object.__setattr__(self, "_surface", surface)
        object.__setattr__(self, "_finish", finish)
        object.__setattr__(self, "_finish_set", finish_set)

    def __getattr__(self, name: str) -> Any:
        member = self._surface.interceptable_member(name)
        if member.is_property:
            return self._finish(member, Accessor.GET, (), {})

        def pattern(*args, **kwargs):
            return self._finish(member, Accessor.CALL, args, kwargs)

        pattern.__name__ = name
        return pattern

    def __setattr__(self, name: str, value: Any) -> None:
        member = self._surface.interceptable_member(name)
        if self._finish_set is None:
            raise ConfigurationError(f"Assigning to '{name}' has no meaning here; use on_set or when_set.")
        if not (member.is_property and member.writable):
            raise ConfigurationError(f"'{name}' of '{self._surface.name}' is not a writable property.")
        self._finish_set(member, Accessor.SET, (value,), {})

    def __getitem__(self, key: Any) -> Any:
        return self.__getattr__("__getitem__")(key)

    def __setitem__(self, key: Any, value: Any) -> None:
        self.__getattr__("__setitem__")(key, value)


class ResultChain:
    """Appends further steps to a result binding: they run once the earlier steps are used up."""

    def __init__(self, binding: ExpectationBinding):
        self.binding = binding

    def then_return(self, *values: Any) -> "ResultChain":
        if not values:
            raise ConfigurationError("then_return needs at least one value.")
        for value in values:
            self.binding.append(ReturnConstant(value))
        return self

    def then_compute(self, function: Callable[[Invocation], Any]) -> "ResultChain":
        self.binding.append(ReturnComputed(function))
        return self

    def then_throw(self, error: Any) -> "ResultChain":
        self.binding.append(ThrowError(error))
        return self


class ResultBuilder:
    """
    Configures what calls matching a pattern return.

    The pattern arguments are kept as given until a `returns*` or `throws*`
    method is called, so the any-args forms can ignore them.
    """

    def __init__(self, owner: "Substitute", member: Member, accessor: Accessor, args: tuple, kwargs: dict):
        self._owner = owner
        self._member = member
        self._accessor = accessor
        self._args = args
        self._kwargs = kwargs
        self._outputs: dict[int, Any] = {}

    def sets_output(self, index: int, value: Any) -> "ResultBuilder":
        """Write `value` into the out or ref argument at `index` on every matching call."""
        if self._accessor != Accessor.CALL or index not in self._member.output_positions():
            raise ArgumentIsNotOutOrRefError(
                f"Argument {index} of {self._member.name} is not an out or ref parameter."
            )
        self._outputs[index] = value
        return self

    def _bind(self, sequence: ActionSequence, any_args: bool) -> ResultChain:
        pattern = build_pattern(self._member, self._accessor, self._args, self._kwargs, any_args=any_args)
        action: Action = sequence
        if self._outputs:
            action = CompositeAction([OutputWrite(self._outputs)], sequence)
        binding = self._owner.state.registry.bind(pattern, action)
        return ResultChain(binding)

    @staticmethod
    def _values(values: tuple) -> ActionSequence:
        if not values:
            raise ConfigurationError("returns needs at least one value.")
        return ReturnSequence(values)

    def returns(self, *values: Any) -> ResultChain:
        """Return the values in order on successive calls, then keep returning the last one."""
        return self._bind(self._values(values), any_args=False)

    def returns_computed(self, function: Callable[[Invocation], Any]) -> ResultChain:
        """Return `function(call)`; `call[i]` reads argument i and `call[i] = v` writes an out slot."""
        return self._bind(ActionSequence([ReturnComputed(function)]), any_args=False)

    def throws(self, error: Any) -> ResultChain:
        return self._bind(ActionSequence([ThrowError(error)]), any_args=False)

    def returns_for_any_args(self, *values: Any) -> ResultChain:
        return self._bind(self._values(values), any_args=True)

    def returns_computed_for_any_args(self, function: Callable[[Invocation], Any]) -> ResultChain:
        return self._bind(ActionSequence([ReturnComputed(function)]), any_args=True)

    def throws_for_any_args(self, error: Any) -> ResultChain:
        return self._bind(ActionSequence([ThrowError(error)]), any_args=True)


class WhenBuilder:
    """Registers side effects that run on every matching call, before the result is produced."""

    def __init__(self, owner: "Substitute", member: Member, accessor: Accessor, args: tuple, kwargs: dict):
        self._owner = owner
        self._member = member
        self._accessor = accessor
        self._args = args
        self._kwargs = kwargs

    def _bind(self, callback: Any, any_args: bool) -> ExpectationBinding:
        action = callback if isinstance(callback, Action) else SideEffect(callback)
        pattern = build_pattern(self._member, self._accessor, self._args, self._kwargs, any_args=any_args)
        return self._owner.state.registry.bind(pattern, action, BindingKind.SIDE_EFFECT)

    def do(self, callback: Any) -> ExpectationBinding:
        """Run `callback(call)`, or a `Callback` chain, on every matching call."""
        return self._bind(callback, any_args=False)

    def do_for_any_args(self, callback: Any) -> ExpectationBinding:
        return self._bind(callback, any_args=True)

    def throws(self, error: Any) -> ExpectationBinding:
        return self._bind(ThrowError(error), any_args=False)


def _describe_expected(expected: Optional[int]) -> str:
    if expected is None:
        return "at least one call"
    return f"exactly {expected} call{'' if expected == 1 else 's'}"


class Substitute:
    """
    Controls one substitute instance: configures it, verifies it and resets it.

    Attributes:
        instance: The object handed to the code under test.
    """

    def __init__(self, instance: Any, logger: Optional[logging.Logger] = None):
        self.instance = instance
        self._dispatcher = dispatcher_of(instance)
        self.logger = logger or self._dispatcher.logger

    @classmethod
    def of(cls, instance: Any) -> "Substitute":
        """Controller for an existing substitute instance, e.g. a nested one."""
        return cls(instance)

    @property
    def surface(self) -> Surface:
        return self._dispatcher.surface

    @property
    def state(self):
        return self._dispatcher.state

    @property
    def configs(self):
        return self._dispatcher.configs

    # Configuration

    @property
    def on(self) -> _PatternProxy:
        """`sub.on.add(1, 1).returns(2)`, `sub.on.mode.returns("DEC")`."""
        return _PatternProxy(self.surface, self._result_builder)

    def on_set(self, name: str, value: Any) -> ResultBuilder:
        return self._result_builder(self._writable(name), Accessor.SET, (value,), {})

    @property
    def when(self) -> _PatternProxy:
        """`sub.when.set_mode("HEX").do(callback)`."""
        return _PatternProxy(self.surface, self._when_builder)

    def when_set(self, name: str, value: Any) -> WhenBuilder:
        return self._when_builder(self._writable(name), Accessor.SET, (value,), {})

    def _writable(self, name: str) -> Member:
        member = self.surface.interceptable_member(name)
        if not (member.is_property and member.writable):
            raise ConfigurationError(f"'{name}' of '{self.surface.name}' is not a writable property.")
        return member

    def _result_builder(self, member: Member, accessor: Accessor, args: tuple, kwargs: dict) -> ResultBuilder:
        return ResultBuilder(self, member, accessor, args, kwargs)

    def _when_builder(self, member: Member, accessor: Accessor, args: tuple, kwargs: dict) -> WhenBuilder:
        return WhenBuilder(self, member, accessor, args, kwargs)

    # Verification

    def received(self, times: Optional[int] = None) -> _PatternProxy:
        """
        Assert on the next member access: exactly `times` matching calls, or at least one.

        Methods are only checked once called: `received(2).add(1, 1)` verifies,
        while `received(2).add` only returns the checking function and asserts
        nothing. Properties are checked on attribute access or assignment.

        Raises:
            ValueError: If `times` is negative.
            VerificationFailure: When the following member access does not hold.
        """
        return self._verifier(times, any_args=False)

    def did_not_receive(self) -> _PatternProxy:
        return self._verifier(0, any_args=False)

    def received_with_any_args(self, times: Optional[int] = None) -> _PatternProxy:
        return self._verifier(times, any_args=True)

    def did_not_receive_with_any_args(self) -> _PatternProxy:
        return self._verifier(0, any_args=True)

    def _verifier(self, times: Optional[int], any_args: bool) -> _PatternProxy:
        if times is not None and (not isinstance(times, int) or isinstance(times, bool) or times < 0):
            raise ValueError(f"times must be a non-negative int, got {times!r}.")

        def finish(member: Member, accessor: Accessor, args: tuple, kwargs: dict) -> None:
            self._verify(member, accessor, args, kwargs, expected=times, any_args=any_args)

        return _PatternProxy(self.surface, finish, finish)

    def _verify(self, member: Member, accessor: Accessor, args: tuple, kwargs: dict, *,
                expected: Optional[int], any_args: bool
                ) -> None:
        recorder = self.state.recorder
        pattern = build_pattern(member, accessor, args, kwargs, any_args=any_args)
        if any_args:
            actual = recorder.query_any_args(member.name, accessor)
        else:
            actual = recorder.query(pattern)

        if (actual >= 1) if expected is None else (actual == expected):
            return

        near_misses = [] if any_args else recorder.near_misses(pattern, self.configs.MAX_NEAR_MISSES)
        message = self._failure_message(pattern, expected, actual, near_misses)
        self.logger.info(message)
        raise VerificationFailure(
            message,
            member=member.name,
            expected=_describe_expected(expected),
            actual=actual,
            near_misses=near_misses,
        )

    def _failure_message(self, pattern: CallPattern, expected: Optional[int], actual: int, near_misses: list) -> str:
        lines = [
            f"Expected to receive {_describe_expected(expected)} matching:",
            f"    {pattern.describe()}",
            f"Actually received {actual} matching call{'' if actual == 1 else 's'}.",
        ]
        if near_misses:
            lines.append("Received non-matching calls (non-matching argument positions listed):")
            lines.extend(f"    {miss.describe()}" for miss in near_misses)
        return "\n".join(lines)

    # Queries

    @property
    def count(self) -> _PatternProxy:
        """`sub.count.add(1, Arg.any(int))` -> number of matching calls."""
        def finish(member: Member, accessor: Accessor, args: tuple, kwargs: dict) -> int:
            return self.state.recorder.query(build_pattern(member, accessor, args, kwargs))
        return _PatternProxy(self.surface, finish, finish)

    @property
    def count_any_args(self) -> _PatternProxy:
        def finish(member: Member, accessor: Accessor, args: tuple, kwargs: dict) -> int:
            return self.state.recorder.query_any_args(member.name, accessor)
        return _PatternProxy(self.surface, finish, finish)

    @property
    def has_received(self) -> _PatternProxy:
        """`sub.has_received.add(1, 1)` -> True when at least one matching call was made."""
        def finish(member: Member, accessor: Accessor, args: tuple, kwargs: dict) -> bool:
            return self.state.recorder.query(build_pattern(member, accessor, args, kwargs)) > 0
        return _PatternProxy(self.surface, finish, finish)

    def received_calls(self) -> list[Invocation]:
        return self.state.recorder.calls()

    # Reset

    def clear_received_calls(self) -> None:
        """Forget recorded calls. Configured behaviour is kept."""
        self.state.clear_received_calls()

    def clear_configuration(self, member: Optional[str] = None) -> None:
        """
        Forget configured behaviour and recorded calls, for every member or just one.

        With `member` given, the bindings and calls of other members are kept.
        """
        if member is not None:
            self.surface.member(member)
        self.state.clear_configuration(member)

    def __repr__(self) -> str:
        return f"Substitute({self.surface.name})"
