from ._action import (
    Action,
    CompositeAction,
    DoNothing,
    OutputWrite,
    ReturnComputed,
    ReturnConstant,
    SideEffect,
    ThrowError,
)
from ._callback import Callback
from ._defaults import canonical_empty
from ._engine import ActionEngine
from ._sequence import ActionSequence, ReturnSequence


__all__ = [
    "Action",
    "ActionEngine",
    "ActionSequence",
    "Callback",
    "CompositeAction",
    "DoNothing",
    "OutputWrite",
    "ReturnComputed",
    "ReturnConstant",
    "ReturnSequence",
    "SideEffect",
    "ThrowError",
    "canonical_empty",
]
