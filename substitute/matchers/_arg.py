from typing import Any


from ._exact import ExactValue
from ._matcher import Matcher
from ._predicate import InRange, Predicate, Regex
from ._wildcard import CaptureSink, InvokeArgument, Wildcard


class Arg:
    """
    Factory namespace for argument matchers used in call patterns.

    Example:
        >>> sub.on.add(Arg.any(int), Arg.is_(lambda b: b % 2 == 0)).returns(3)
    """

    @staticmethod
    def any(annotation: Any = None) -> Wildcard:
        return Wildcard(annotation)

    @staticmethod
    def is_(expected: Any, annotation: Any = None) -> Matcher:
        """A predicate matcher when `expected` is callable, otherwise an exact-value matcher."""
        if isinstance(expected, Matcher):
            return expected
        if callable(expected) and not isinstance(expected, type):
            return Predicate(expected, annotation=annotation)
        return ExactValue(expected)

    @staticmethod
    def capture(annotation: Any = None) -> CaptureSink:
        return CaptureSink(annotation)

    @staticmethod
    def invoke(*args: Any, **kwargs: Any) -> InvokeArgument:
        return InvokeArgument(*args, **kwargs)

    @staticmethod
    def matches(pattern: str, flags: int = 0) -> Regex:
        return Regex(pattern, flags)

    @staticmethod
    def in_range(low: Any, high: Any, inclusive: bool = True) -> InRange:
        return InRange(low, high, inclusive)
