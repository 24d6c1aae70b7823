"""
The record of a single call made on a substitute.
"""
import copy
import itertools
from enum import Enum
from typing import Any, Optional, Sequence


from .errors import AmbiguousArgumentsError, ArgumentIsNotOutOrRefError, ArgumentNotFoundError
from .surface import Member, Param


class Accessor(str, Enum):
    CALL = "call"
    GET = "get"
    SET = "set"


class Ref:
    """
    Mutable box passed for out and ref parameters.

    The substitute writes configured output values into `value` before the
    call returns, so the caller reads them after the call.
    """
    __slots__ = ("value",)

    def __init__(self, value: Any = None):
        self.value = value

    def __repr__(self) -> str:
        return f"Ref({self.value!r})"


_SEQUENCE = itertools.count(1)
_MUTABLE_BUILTINS = (list, dict, set, bytearray)


def _snapshot(value: Any) -> Any:
    if type(value) in _MUTABLE_BUILTINS:
        return copy.copy(value)
    return value


class Invocation:
    """
    One call on a substitute: the member, its argument snapshot and its output slots.

    `args()` is a snapshot taken when the call is made: builtin lists, dicts,
    sets and bytearrays are shallow-copied, so mutating them afterwards does
    not change what was recorded. Indexing (`call[i]`) and `arg(type)` give
    the objects the caller passed. Out and ref positions own a `Ref` slot
    that actions may write into through indexed assignment (`call[2] = 0.4`).
    """

    def __init__(self, member: Member, accessor: Accessor, args: Sequence[Any], slots: Optional[dict[int, Ref]] = None):
        self.member = member
        self.accessor = accessor
        self._values = tuple(args)
        self._args = tuple(_snapshot(arg) for arg in self._values)
        self._slots = dict(slots or {})
        self.sequence = next(_SEQUENCE)

    @property
    def name(self) -> str:
        return self.member.name

    @property
    def key(self) -> tuple[str, Accessor]:
        return (self.member.name, self.accessor)

    @property
    def params(self) -> tuple[Param, ...]:
        """Declared parameters for this kind of access."""
        if self.accessor == Accessor.CALL:
            return self.member.params
        if self.accessor == Accessor.SET:
            return (Param(name="value", annotation=self.member.returns),)
        return ()

    def args(self) -> tuple[Any, ...]:
        """The argument values as they were when the call was made."""
        return self._args

    def slot(self, index: int) -> Ref:
        try:
            return self._slots[index]
        except KeyError as e:
            raise ArgumentIsNotOutOrRefError(
                f"Argument {index} of {self.name} is not an out or ref parameter."
            ) from e

    def __len__(self) -> int:
        return len(self._args)

    def __getitem__(self, index: int) -> Any:
        if index in self._slots:
            return self._slots[index].value
        return self._values[index]

    def __setitem__(self, index: int, value: Any) -> None:
        self.slot(index).value = value

    def arg(self, annotation: Any) -> Any:
        """
        Return the single argument of the given type.

        Parameters whose declared type is `annotation` are considered first;
        when none is declared that way, argument values are checked with
        `isinstance`.

        Raises:
            AmbiguousArgumentsError: If more than one parameter has that type.
            ArgumentNotFoundError: If no parameter has that type.
        """
        positions = [idx for idx, param in enumerate(self.params) if param.annotation == annotation]
        if not positions and isinstance(annotation, type):
            positions = [idx for idx, value in enumerate(self._values) if isinstance(value, annotation)]

        type_name = getattr(annotation, "__name__", repr(annotation))
        if not positions:
            raise ArgumentNotFoundError(f"{self.name} has no argument of type {type_name}.")
        if len(positions) > 1:
            raise AmbiguousArgumentsError(
                f"{self.name} has {len(positions)} arguments of type {type_name} "
                f"(positions {positions}); read them by index instead."
            )
        return self[positions[0]]

    def __repr__(self) -> str:
        if self.accessor == Accessor.GET:
            return self.name
        if self.accessor == Accessor.SET:
            return f"{self.name} = {self._args[0]!r}"
        return f"{self.name}({', '.join(repr(arg) for arg in self._args)})"
