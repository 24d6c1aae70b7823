from typing import Any


from ._matcher import Matcher


def _type_name(annotation: Any) -> str:
    return getattr(annotation, "__name__", repr(annotation))


class Wildcard(Matcher):
    """Matches any argument. The optional type is only checked at registration."""

    def __init__(self, annotation: Any = None):
        self.annotation = annotation

    def matches(self, value: Any) -> bool:
        return True

    def describe(self) -> str:
        if self.annotation is None:
            return "Arg.any()"
        return f"Arg.any({_type_name(self.annotation)})"


class CaptureSink(Wildcard):
    """
    Matches any argument and keeps every value it is dispatched with.

    Values are appended when the binding that owns the sink is selected for a
    call, or when a call is counted by a verification that uses the sink.
    """

    def __init__(self, annotation: Any = None):
        super().__init__(annotation)
        self.values: list[Any] = []

    @property
    def last(self) -> Any:
        if not self.values:
            raise LookupError("Nothing has been captured yet.")
        return self.values[-1]

    def on_dispatch(self, value: Any) -> None:
        self.values.append(value)

    on_verify = on_dispatch

    def describe(self) -> str:
        if self.annotation is None:
            return "Arg.capture()"
        return f"Arg.capture({_type_name(self.annotation)})"


class InvokeArgument(Wildcard):
    """Matches any argument and calls it with the stored arguments once dispatched."""

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__()
        self.args = args
        self.kwargs = kwargs

    def on_dispatch(self, value: Any) -> None:
        if not callable(value):
            raise TypeError(f"Arg.invoke expected a callable argument, got {type(value).__name__}.")
        value(*self.args, **self.kwargs)

    def describe(self) -> str:
        return f"Arg.invoke{self.args!r}"
