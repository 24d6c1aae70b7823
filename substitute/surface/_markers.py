from enum import Enum
from typing import Generic, TypeVar


T = TypeVar("T")


class Direction(str, Enum):
    IN = "in"
    OUT = "out"
    REF = "ref"


class MemberKind(str, Enum):
    METHOD = "method"
    PROPERTY = "property"


class Out(Generic[T]):
    """Annotation marker for a parameter the callee writes into, e.g. ``remainder: Out[float]``."""


class InOut(Generic[T]):
    """Annotation marker for a parameter the callee both reads and writes."""
