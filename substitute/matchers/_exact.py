from typing import Any


from ._matcher import Matcher


class ExactValue(Matcher):
    """Matches arguments equal to `expected`."""

    def __init__(self, expected: Any):
        self.expected = expected

    def matches(self, value: Any) -> bool:
        return value == self.expected

    def describe(self) -> str:
        return repr(self.expected)
