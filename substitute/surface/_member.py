import inspect
from typing import Any


from pydantic import BaseModel, ConfigDict


from ._markers import Direction, MemberKind


EMPTY = inspect.Parameter.empty


class Param(BaseModel):
    """One declared parameter of a member: its name, declared type and direction."""
    model_config = ConfigDict(frozen=True)

    name: str
    annotation: Any = None
    direction: Direction = Direction.IN
    default: Any = EMPTY

    @property
    def has_default(self) -> bool:
        return self.default is not EMPTY

    @property
    def is_output(self) -> bool:
        """True for out and ref parameters, which own a writable slot."""
        return self.direction in (Direction.OUT, Direction.REF)


class Member(BaseModel):
    """
    Signature of one member of a surface.

    Attributes:
        name (str): Attribute name on the substituted object.
        kind (MemberKind): Method or property.
        params (tuple[Param, ...]): Declared parameters, excluding self.
        returns (Any): Declared return type, or the property type.
        writable (bool): Whether a property has a setter.
        interceptable (bool): False when calls to the member cannot be routed to a substitute.
        reason (str): Why the member is not interceptable.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    kind: MemberKind = MemberKind.METHOD
    params: tuple[Param, ...] = ()
    returns: Any = None
    writable: bool = False
    interceptable: bool = True
    reason: str = ""

    @property
    def is_property(self) -> bool:
        return self.kind == MemberKind.PROPERTY

    def output_positions(self) -> list[int]:
        return [idx for idx, param in enumerate(self.params) if param.is_output]
