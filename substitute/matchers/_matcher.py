import abc
from typing import Any


class Matcher(abc.ABC):
    """
    Decides whether one argument value satisfies a registered expectation.

    `annotation` is the type the matcher was declared for, if any. It is
    checked against the parameter's declared type when the pattern is
    registered, never against argument values.
    """
    annotation: Any = None

    @abc.abstractmethod
    def matches(self, value: Any) -> bool:
        """Return True when `value` satisfies this matcher."""

    def on_dispatch(self, value: Any) -> None:
        """Called with the argument once the pattern owning this matcher is selected."""

    def on_verify(self, value: Any) -> None:
        """Called with the argument of each call a verification counts."""

    @abc.abstractmethod
    def describe(self) -> str:
        """Short human readable form used in diagnostics."""

    def __repr__(self) -> str:
        return self.describe()
