from typing import Any, Callable


from ..errors import ConfigurationError
from ..invocation import Invocation
from ._action import Action, DoNothing, ErrorSpec, SideEffect, ThrowError
from ._sequence import ActionSequence


class Callback(Action):
    """
    A chain of side effects for `when(...).do(...)`, one step per call.

    Build it with the class methods and the `then_*` methods:

        Callback.first(log_first).then(log_second).then_throw(ValueError).then_keep_doing(log_rest)

    After the listed steps run out nothing happens, unless the chain ends with
    `then_keep_doing` or `then_keep_throwing`. Callbacks added with
    `and_always` run on every call, after the step, even when the step raises.
    """

    def __init__(self) -> None:
        self._sequence = ActionSequence(terminal=DoNothing())
        self._always: list[Action] = []
        self._closed = False

    def _push(self, step: Action) -> "Callback":
        if self._closed:
            raise ConfigurationError("Cannot add steps after then_keep_doing or then_keep_throwing.")
        self._sequence.append(step)
        return self

    def _close(self, terminal: Action) -> "Callback":
        if self._closed:
            raise ConfigurationError("The callback chain already ends with a repeating step.")
        self._sequence.terminal = terminal
        self._closed = True
        return self

    @classmethod
    def first(cls, callback: Callable[[Invocation], Any]) -> "Callback":
        return cls()._push(SideEffect(callback))

    @classmethod
    def first_throw(cls, error: ErrorSpec) -> "Callback":
        return cls()._push(ThrowError(error))

    @classmethod
    def always(cls, callback: Callable[[Invocation], Any]) -> "Callback":
        return cls()._close(SideEffect(callback))

    @classmethod
    def always_throw(cls, error: ErrorSpec) -> "Callback":
        return cls()._close(ThrowError(error))

    def then(self, callback: Callable[[Invocation], Any]) -> "Callback":
        return self._push(SideEffect(callback))

    def then_throw(self, error: ErrorSpec) -> "Callback":
        return self._push(ThrowError(error))

    def then_keep_doing(self, callback: Callable[[Invocation], Any]) -> "Callback":
        return self._close(SideEffect(callback))

    def then_keep_throwing(self, error: ErrorSpec) -> "Callback":
        return self._close(ThrowError(error))

    def and_always(self, callback: Callable[[Invocation], Any]) -> "Callback":
        self._always.append(SideEffect(callback))
        return self

    def execute(self, invocation: Invocation) -> None:
        try:
            self._sequence.execute(invocation)
        finally:
            for action in self._always:
                action.execute(invocation)
