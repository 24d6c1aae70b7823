import re
from typing import Any, Callable, Optional


from ._matcher import Matcher


class Predicate(Matcher):
    """
    Matches arguments for which `predicate(value)` is truthy.

    Errors raised by the predicate are not handled here; the code that walks
    a pattern decides whether they abort the match or propagate.
    """

    def __init__(self, predicate: Callable[[Any], Any], annotation: Any = None, description: Optional[str] = None):
        if not callable(predicate):
            raise TypeError(f"predicate must be callable, got {type(predicate).__name__}.")
        self.predicate = predicate
        self.annotation = annotation
        self._description = description

    def matches(self, value: Any) -> bool:
        return bool(self.predicate(value))

    def describe(self) -> str:
        if self._description is not None:
            return self._description
        name = getattr(self.predicate, "__name__", type(self.predicate).__name__)
        return f"Arg.is_({name})"


class Regex(Predicate):
    """Matches strings that `re.search` finds the pattern in."""

    def __init__(self, pattern: str, flags: int = 0):
        self.pattern = re.compile(pattern, flags)
        super().__init__(self._search, annotation=str, description=f"Arg.matches({pattern!r})")

    def _search(self, value: Any) -> bool:
        return isinstance(value, str) and self.pattern.search(value) is not None


class InRange(Predicate):
    """Matches values between `low` and `high`, bounds included unless `inclusive` is False."""

    def __init__(self, low: Any, high: Any, inclusive: bool = True):
        if low > high:
            raise ValueError(f"low must not exceed high, got {low!r} > {high!r}.")
        self.low = low
        self.high = high
        self.inclusive = inclusive
        kind = "inclusive" if inclusive else "exclusive"
        super().__init__(self._within, description=f"Arg.in_range({low!r}, {high!r}, {kind})")

    def _within(self, value: Any) -> bool:
        if self.inclusive:
            return self.low <= value <= self.high
        return self.low < value < self.high
