import abc
from typing import Any, Callable, Union


from ..invocation import Invocation


ErrorSpec = Union[BaseException, type, Callable[[Invocation], BaseException]]


class Action(abc.ABC):
    """Something a substitute does when a call matches a binding."""

    @abc.abstractmethod
    def execute(self, invocation: Invocation) -> Any:
        """Carry out the action for one call and return the call's result."""


class ReturnConstant(Action):

    def __init__(self, value: Any):
        self.value = value

    def execute(self, invocation: Invocation) -> Any:
        return self.value

    def __repr__(self) -> str:
        return f"ReturnConstant({self.value!r})"


class ReturnComputed(Action):
    """Returns `function(invocation)`; the function may read arguments and write output slots."""

    def __init__(self, function: Callable[[Invocation], Any]):
        if not callable(function):
            raise TypeError(f"function must be callable, got {type(function).__name__}.")
        self.function = function

    def execute(self, invocation: Invocation) -> Any:
        return self.function(invocation)


class ThrowError(Action):
    """
    Raises instead of returning.

    `error` is an exception instance (raised as is), an exception class
    (instantiated without arguments on every call), or a factory called with
    the invocation that returns the exception to raise.
    """

    def __init__(self, error: ErrorSpec):
        if not (isinstance(error, BaseException) or callable(error)):
            raise TypeError(f"error must be an exception, exception class or factory, got {type(error).__name__}.")
        self.error = error

    def _make(self, invocation: Invocation) -> BaseException:
        if isinstance(self.error, BaseException):
            return self.error
        if isinstance(self.error, type) and issubclass(self.error, BaseException):
            return self.error()
        error = self.error(invocation)
        if not isinstance(error, BaseException):
            raise TypeError(f"Error factory returned {type(error).__name__}, not an exception.")
        return error

    def execute(self, invocation: Invocation) -> Any:
        raise self._make(invocation)

    def __repr__(self) -> str:
        return f"ThrowError({self.error!r})"


class SideEffect(Action):
    """Calls `callback(invocation)` for its effect only."""

    def __init__(self, callback: Callable[[Invocation], Any]):
        if not callable(callback):
            raise TypeError(f"callback must be callable, got {type(callback).__name__}.")
        self.callback = callback

    def execute(self, invocation: Invocation) -> None:
        self.callback(invocation)


class DoNothing(Action):

    def execute(self, invocation: Invocation) -> None:
        return None

    def __repr__(self) -> str:
        return "DoNothing()"


class OutputWrite(Action):
    """Writes values into out and ref slots, keyed by parameter position."""

    def __init__(self, outputs: dict[int, Any]):
        self.outputs = dict(outputs)

    def execute(self, invocation: Invocation) -> None:
        for index, value in self.outputs.items():
            invocation[index] = value


class CompositeAction(Action):
    """Runs `effects` in order, then returns what `result` returns."""

    def __init__(self, effects: list[Action], result: Action):
        self.effects = list(effects)
        self.result = result

    def execute(self, invocation: Invocation) -> Any:
        for effect in self.effects:
            effect.execute(invocation)
        return self.result.execute(invocation)
