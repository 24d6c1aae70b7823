import abc
import functools
import inspect
import typing
from typing import Any, Optional


from pydantic import BaseModel, PrivateAttr


from ..errors import UnknownMemberError, UnsupportedMemberError
from ._markers import Direction, InOut, MemberKind, Out
from ._member import EMPTY, Member, Param


# Bases whose attributes are never part of a user surface.
_IGNORED_BASES = {object, abc.ABC, typing.Generic, typing.Protocol}

# Special methods that are routed through a substitute when a surface declares them.
_SUPPORTED_DUNDERS = {
    "__call__", "__contains__", "__getitem__", "__setitem__", "__delitem__",
    "__iter__", "__len__", "__enter__", "__exit__",
}


class Surface(BaseModel):
    """
    The member list a substitute implements.

    A surface is either declared by hand from `Member` models or derived from
    an interface-like class with `Surface.from_class`. Only member signatures
    are needed, never an implementation.

    Attributes:
        name (str): Display name used in diagnostics.
        members (tuple[Member, ...]): The members of the surface.
        base (Any): The class the surface was derived from, if any. Generated
            adapters subclass it so `isinstance` checks still pass.
    """
    name: str
    members: tuple[Member, ...] = ()
    base: Any = None

    _adapter_class: Optional[type] = PrivateAttr(default=None)

    def member(self, name: str) -> Member:
        """
        Look up a member by name.

        Raises:
            UnknownMemberError: If the surface has no member called `name`.
        """
        for member in self.members:
            if member.name == name:
                return member
        raise UnknownMemberError(f"'{self.name}' has no member named '{name}'.")

    def interceptable_member(self, name: str) -> Member:
        """
        Look up a member that calls can be routed through.

        Raises:
            UnknownMemberError: If the surface has no member called `name`.
            UnsupportedMemberError: If the member exists but cannot be intercepted.
        """
        member = self.member(name)
        if not member.interceptable:
            raise UnsupportedMemberError(
                f"Member '{name}' of '{self.name}' cannot be substituted: {member.reason}"
            )
        return member

    def __contains__(self, name: object) -> bool:
        return any(member.name == name for member in self.members)

    @classmethod
    def from_class(cls, source: type) -> "Surface":
        """
        Derive a surface from a Protocol, abstract base class or plain class.

        Public methods, properties and annotated attributes become members.
        Parameters annotated `Out[T]` or `InOut[T]` become out and ref parameters.
        Members decorated with `typing.final`, static methods, class methods and
        methods with variadic parameters are kept but marked not interceptable.
        The result is cached per class.

        Args:
            source (type): The class to read member signatures from.

        Returns:
            Surface: The derived surface.

        Raises:
            TypeError: If `source` is not a class.
        """
        if not isinstance(source, type):
            raise TypeError(f"source must be a class, got {type(source).__name__}.")
        return _surface_for_class(source)


def is_surface_type(candidate: Any) -> bool:
    """Whether a declared type is something a nested substitute can be made for."""
    if isinstance(candidate, Surface):
        return True
    if not isinstance(candidate, type) or candidate in _IGNORED_BASES:
        return False
    return bool(getattr(candidate, "_is_protocol", False)) or inspect.isabstract(candidate)


def _wanted_name(name: str) -> bool:
    return not name.startswith("_") or name in _SUPPORTED_DUNDERS


def _type_hints(func: Any) -> dict[str, Any]:
    try:
        return typing.get_type_hints(func)
    except (NameError, TypeError):
        return dict(getattr(func, "__annotations__", {}))


def _split_direction(annotation: Any) -> tuple[Any, Direction]:
    origin = typing.get_origin(annotation)
    if origin is Out:
        return (typing.get_args(annotation) or (None,))[0], Direction.OUT
    if origin is InOut:
        return (typing.get_args(annotation) or (None,))[0], Direction.REF
    return annotation, Direction.IN


def _method_member(name: str, func: Any) -> Member:
    if getattr(func, "__final__", False):
        return Member(name=name, interceptable=False, reason="it is decorated with @final")

    hints = _type_hints(func)
    params = []
    for idx, parameter in enumerate(inspect.signature(func).parameters.values()):
        if idx == 0 and parameter.name in ("self", "cls"):
            continue
        if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD):
            return Member(name=name, interceptable=False, reason="it takes variadic parameters")
        annotation, direction = _split_direction(hints.get(parameter.name))
        params.append(Param(
            name=parameter.name,
            annotation=annotation,
            direction=direction,
            default=parameter.default,
        ))
    return Member(name=name, params=tuple(params), returns=hints.get("return"))


def _property_member(name: str, prop: property) -> Member:
    if getattr(prop.fget, "__final__", False):
        return Member(
            name=name, kind=MemberKind.PROPERTY,
            interceptable=False, reason="it is decorated with @final"
        )
    returns = _type_hints(prop.fget).get("return") if prop.fget is not None else None
    return Member(
        name=name, kind=MemberKind.PROPERTY, returns=returns, writable=prop.fset is not None
    )


@functools.lru_cache(maxsize=None)
def _surface_for_class(source: type) -> Surface:
    members: dict[str, Member] = {}
    for klass in source.__mro__:
        if klass in _IGNORED_BASES:
            continue
        for name, value in vars(klass).items():
            if name in members or not _wanted_name(name):
                continue
            if isinstance(value, property):
                members[name] = _property_member(name, value)
            elif isinstance(value, (staticmethod, classmethod)):
                members[name] = Member(
                    name=name, interceptable=False,
                    reason="static and class methods are not called through the instance",
                )
            elif inspect.isfunction(value):
                members[name] = _method_member(name, value)

        # Bare annotations such as `mode: str` on a Protocol are read/write attributes.
        hints = _type_hints(klass)
        for name, raw in inspect.get_annotations(klass).items():
            if name in members or name.startswith("_"):
                continue
            annotation = hints.get(name, raw)
            if typing.get_origin(annotation) is typing.ClassVar:
                continue
            members[name] = Member(
                name=name, kind=MemberKind.PROPERTY, returns=annotation, writable=True
            )

    return Surface(name=source.__name__, members=tuple(members.values()), base=source)
