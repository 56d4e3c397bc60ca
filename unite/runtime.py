"""Runtime support for generated unions.

Every generated union subclasses TaggedUnion. The subclass body supplies
the case constructors and accessors; this module holds the storage slots,
the case bookkeeping, and the conversion registry.

Runtime state on the class and its instances lives under ``__unite_*__``
names. Case names are never dunder names, so a case constructor cannot
shadow it. Operations on a union that are not per-case live here as
functions for the same reason.
"""

from __future__ import annotations

import typing
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U", bound="TaggedUnion")

_Constructor = Callable[[Any], "TaggedUnion"]


def conversion_key(payload_type: Any) -> type:
    """Return the runtime class that a conversion from ``payload_type`` dispatches on."""
    if payload_type is None:
        return type(None)
    origin = typing.get_origin(payload_type)
    if origin is not None:
        return origin
    if isinstance(payload_type, type):
        return payload_type
    raise TypeError(f"{payload_type!r} cannot be used as a conversion source type")


def tuple_arity(payload_type: Any) -> int | None:
    """Length of a fixed-size ``tuple[...]`` type, None for anything else."""
    if typing.get_origin(payload_type) is not tuple:
        return None
    args = typing.get_args(payload_type)
    if args == ((),):
        # tuple[()] on Python 3.10
        args = ()
    if Ellipsis in args:
        return None
    return len(args)


class _MemberTable(dict):
    """Class-body namespace that refuses to bind the same name twice."""

    def __init__(self, union_name: str) -> None:
        super().__init__()
        self._union_name = union_name

    def __setitem__(self, key: str, value: Any) -> None:
        if key in self:
            raise TypeError(f"duplicate member '{key}' in union '{self._union_name}'")
        super().__setitem__(key, value)


class UnionMeta(type):
    """Metaclass of tagged unions.

    A generated body defines each case constructor and accessor once. Two
    variants whose generated names coincide (`A` and `is_a`, or `FooBar` and
    `foo_bar`) therefore fail when the class is defined instead of one
    silently replacing the other.
    """

    @classmethod
    def __prepare__(mcs, name: str, bases: tuple[type, ...], **kwargs: Any) -> dict[str, Any]:
        return _MemberTable(name)


class TaggedUnion(metaclass=UnionMeta):
    """Base class of generated tagged unions.

    A value holds exactly one case at a time. The discriminant is the
    case's index in ``__cases__``. Calling the class with a payload,
    ``Shape(rect)``, converts it through the registered conversions.
    """

    __slots__ = ("__unite_tag__", "__unite_value__")
    __cases__: tuple[str, ...] = ()

    __unite_conversions__: dict[type, list[tuple[int | None, _Constructor]]] = {}

    def __new__(cls, value: Any) -> Any:
        return from_value(cls, value)

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        seen: set[str] = set()
        for name in cls.__dict__.get("__cases__", ()):
            if name in seen:
                raise TypeError(f"duplicate case '{name}' in union '{cls.__name__}'")
            seen.add(name)
        cls.__unite_conversions__ = {}

    @classmethod
    def __unite_make__(cls, discriminant: int, value: Any) -> Any:
        instance = object.__new__(cls)
        instance.__unite_tag__ = discriminant
        instance.__unite_value__ = value
        return instance


# ---------------------------------------------------------------------------
# Inspection
# ---------------------------------------------------------------------------


def tag_of(union: TaggedUnion) -> str:
    """Name of the case ``union`` holds."""
    return type(union).__cases__[union.__unite_tag__]


def discriminant_of(union: TaggedUnion) -> int:
    return union.__unite_tag__


def assign(target: U, source: U) -> U:
    """Overwrite ``target`` in place with the case and payload of ``source``.

    Both must be instances of the same union. Returns ``target``.
    """
    if type(source) is not type(target):
        raise TypeError(
            f"cannot assign '{type(source).__name__}' to '{type(target).__name__}'"
        )
    target.__unite_tag__ = source.__unite_tag__
    target.__unite_value__ = source.__unite_value__
    return target


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------


def register_conversion(
    union_type: type[TaggedUnion], payload_type: Any, constructor: _Constructor
) -> None:
    """Record that values of ``payload_type`` convert to ``union_type`` through ``constructor``.

    Fixed-size tuple types only match tuples of their length, so ``()`` and
    ``(int, str)`` payloads convert to different cases.
    """
    entries = union_type.__unite_conversions__.setdefault(conversion_key(payload_type), [])
    entries.append((tuple_arity(payload_type), constructor))


def from_value(union_type: type[U], value: Any) -> U:
    """Wrap ``value`` in the case of ``union_type`` whose payload type matches it.

    The value's MRO is searched most-derived first. Raises TypeError when no
    case, or more than one case, accepts the value.
    """
    for klass in type(value).__mro__:
        constructors = [
            constructor
            for arity, constructor in union_type.__unite_conversions__.get(klass, ())
            if arity is None or arity == len(value)
        ]
        if not constructors:
            continue
        if len(constructors) > 1:
            names = ", ".join(c.__name__ for c in constructors)
            raise TypeError(
                f"ambiguous conversion from '{klass.__name__}' to '{union_type.__name__}' "
                f"(cases: {names})"
            )
        return constructors[0](value)

    raise TypeError(f"no conversion from '{type(value).__name__}' to '{union_type.__name__}'")


class PayloadRef(Generic[T]):
    """Writable view of a union's payload, returned by ``as_<case>_mut``.

    Assigning ``value`` replaces the payload held by the owning union. The
    reference is bound to the case it was taken for and raises
    RuntimeError while the union holds a different case.
    """

    __slots__ = ("_owner", "_discriminant")

    def __init__(self, owner: TaggedUnion, discriminant: int) -> None:
        self._owner = owner
        self._discriminant = discriminant

    def _check(self) -> None:
        held = self._owner.__unite_tag__
        if held != self._discriminant:
            cases = type(self._owner).__cases__
            raise RuntimeError(
                f"stale reference: '{type(self._owner).__name__}' holds case "
                f"'{cases[held]}', not '{cases[self._discriminant]}'"
            )

    @property
    def value(self) -> T:
        self._check()
        return self._owner.__unite_value__

    @value.setter
    def value(self, new: T) -> None:
        self._check()
        self._owner.__unite_value__ = new

    def __repr__(self) -> str:
        return f"PayloadRef({self._owner.__unite_value__!r})"
