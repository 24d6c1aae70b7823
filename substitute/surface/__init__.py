from ._markers import Direction, InOut, MemberKind, Out
from ._member import Member, Param
from ._surface import Surface, is_surface_type


__all__ = [
    "Direction",
    "InOut",
    "Member",
    "MemberKind",
    "Out",
    "Param",
    "Surface",
    "is_surface_type",
]
