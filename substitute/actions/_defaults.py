import collections.abc
import typing
from typing import Any


_NUMERIC = (int, float, complex)
_CONTAINERS = (list, tuple, set, frozenset, dict, bytearray)
_ITERATORS = (collections.abc.Iterator, collections.abc.Generator)
_ABSTRACT_SEQUENCES = (
    collections.abc.Iterable,
    collections.abc.Collection,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
)
_ABSTRACT_MAPPINGS = (collections.abc.Mapping, collections.abc.MutableMapping)
_ABSTRACT_SETS = (collections.abc.Set, collections.abc.MutableSet)


def canonical_empty(annotation: Any) -> Any:
    """
    The zero or empty value of a declared type.

    Numbers give zero of their own type, `bool` gives False, text and bytes
    give empty strings, containers give an empty instance, and abstract
    iterables give an empty list. Iterators and generators give an exhausted
    iterator, so `next` and `for` work on the result. Anything else, including no annotation,
    gives None.

    Args:
        annotation (Any): A declared return or parameter type.

    Returns:
        Any: The canonical empty value for that type.
    """
    origin = typing.get_origin(annotation) or annotation
    if origin is bool:
        return False
    if origin in _NUMERIC:
        return origin()
    if origin is str:
        return ""
    if origin is bytes:
        return b""
    if origin in _CONTAINERS:
        return origin()
    if origin in _ABSTRACT_MAPPINGS:
        return {}
    if origin in _ABSTRACT_SETS:
        return set()
    if origin in _ITERATORS:
        return iter(())
    if origin in _ABSTRACT_SEQUENCES:
        return []
    return None


def is_canonical_empty(annotation: Any, value: Any) -> bool:
    """Whether `value` is the canonical empty value of `annotation`."""
    if value is None:
        return True
    empty = canonical_empty(annotation)
    return empty is not None and type(value) is type(empty) and value == empty
