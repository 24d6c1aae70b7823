"""
Generates one adapter class per surface.

Each member of the surface becomes a real method or property on the adapter
class, built from the member's declared signature. Every one of them hands
its member, accessor and arguments to the instance's dispatcher, so no
attribute lookup is intercepted dynamically.
"""
import inspect
from typing import Any


from .actions import canonical_empty
from .errors import UnknownMemberError, UnsupportedMemberError
from .invocation import Accessor, Ref
from .surface import Direction, Member, Surface


DISPATCHER_ATTR = "_substitute_dispatcher"


class _Omitted:

    def __repr__(self) -> str:
        return "<omitted>"


_OMITTED = _Omitted()


def dispatcher_of(instance: Any):
    """
    Return the dispatcher behind an adapter instance.

    Raises:
        TypeError: If `instance` is not a substitute.
    """
    try:
        return vars(instance)[DISPATCHER_ATTR]
    except (KeyError, TypeError) as e:
        raise TypeError(f"{instance!r} is not a substitute.") from e


def _signature(member: Member) -> inspect.Signature:
    # A parameter may only have a default when every parameter after it has one.
    optional = [False] * len(member.params)
    trailing = True
    for idx in reversed(range(len(member.params))):
        param = member.params[idx]
        trailing = trailing and (param.has_default or param.direction == Direction.OUT)
        optional[idx] = trailing

    parameters = [inspect.Parameter("self", inspect.Parameter.POSITIONAL_OR_KEYWORD)]
    for idx, param in enumerate(member.params):
        default = inspect.Parameter.empty
        if optional[idx]:
            default = param.default if param.has_default else _OMITTED
        parameters.append(inspect.Parameter(
            param.name,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
            default=default,
            annotation=param.annotation if param.annotation is not None else inspect.Parameter.empty,
        ))
    return inspect.Signature(parameters)


def _method(surface: Surface, member: Member):
    signature = _signature(member)

    def method(self, *args, **kwargs):
        try:
            bound = signature.bind(self, *args, **kwargs)
        except TypeError as e:
            raise TypeError(f"{member.name}(): {e}") from e
        bound.apply_defaults()

        values, slots = [], {}
        for idx, param in enumerate(member.params):
            value = bound.arguments[param.name]
            if param.is_output:
                if value is _OMITTED:
                    value = Ref(canonical_empty(param.annotation))
                elif not isinstance(value, Ref):
                    value = Ref(value)
                slots[idx] = value
                values.append(value.value)
            else:
                values.append(value)
        return dispatcher_of(self).dispatch(member, Accessor.CALL, values, slots)

    method.__name__ = member.name
    method.__qualname__ = f"{surface.name}Substitute.{member.name}"
    method.__signature__ = signature
    return method


def _property(member: Member) -> property:

    def fget(self):
        return dispatcher_of(self).dispatch(member, Accessor.GET, ())

    fset = None
    if member.writable:
        def fset(self, value):
            dispatcher_of(self).dispatch(member, Accessor.SET, (value,))

    return property(fget, fset, doc=f"Substituted property {member.name}.")


def _unsupported(surface: Surface, member: Member):

    def method(self, *args, **kwargs):
        raise UnsupportedMemberError(
            f"Member '{member.name}' of '{surface.name}' cannot be substituted: {member.reason}"
        )

    method.__name__ = member.name
    return method


def build_adapter(surface: Surface) -> type:
    """
    Return the adapter class for a surface, generating it on first use.

    When the surface was derived from a class, the adapter subclasses it and
    leaves non-interceptable members to the inherited implementation.

    Args:
        surface (Surface): The surface to implement.

    Returns:
        type: A class whose instances take a dispatcher as their only argument.
    """
    if surface._adapter_class is not None:
        return surface._adapter_class

    def __init__(self, dispatcher):
        object.__setattr__(self, DISPATCHER_ATTR, dispatcher)

    def __getattr__(self, name):
        if name.startswith("__") or name == DISPATCHER_ATTR:
            raise AttributeError(name)
        raise UnknownMemberError(f"'{surface.name}' has no member named '{name}'.")

    def __repr__(self):
        return f"<substitute for {surface.name}>"

    namespace: dict[str, Any] = {
        "__init__": __init__,
        "__getattr__": __getattr__,
        "__repr__": __repr__,
        "__module__": __name__,
        "_substitute_surface": surface,
    }
    for member in surface.members:
        if not member.interceptable:
            if surface.base is None:
                namespace[member.name] = _unsupported(surface, member)
            continue
        if member.is_property:
            namespace[member.name] = _property(member)
        else:
            namespace[member.name] = _method(surface, member)

    bases = (surface.base,) if surface.base is not None else (object,)
    metaclass = type(surface.base) if surface.base is not None else type
    adapter = metaclass(f"{surface.name}Substitute", bases, namespace)
    surface._adapter_class = adapter
    return adapter
