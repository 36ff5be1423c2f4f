"""
Tri-state optional carrier.

This module exposes `Maybe`, a generic value holder with exactly three variants, and
the module-level spellings of those variants:

    Void        field was absent from the source payload   (“leave it unchanged”)
    Null        field was present and explicitly null      (“clear it”)
    Some(v)     field was present with a concrete value    (“set it to v”)

A plain `T | None` collapses the first two states into one, which makes PATCH-style
update payloads ambiguous. Maybe keeps them apart and carries the distinction through
pydantic (see voidable.serialization) and, optionally, GraphQL (see voidable.inputs).

Semantics
- One tag, one payload: the active variant is a single `Variant`; never two flags.
- Default construction yields Void: `Maybe() is Void`.
- Void and Null are process-wide singletons (cached, copy/deepcopy/pickle safe).
- Instances are immutable and the type is final.
- Equality is structural; a Maybe never equals a bare value (`Null != None`).
- Only Some is truthy, including `Some(0)` and `Some("")`.

Binary optional conversion
- Maybe.from_optional(None) is Null, Maybe.from_optional(v) == Some(v). Never Void.
- Maybe.to_optional() collapses Null and Void to None. Deliberately lossy.

Examples
    >>> Maybe.from_optional(34)
    Some(34)
    >>> Some(34).to_optional(), Null.to_optional(), Void.to_optional()
    (34, None, None)
    >>> Maybe.from_mapping({"b": None}, "b"), Maybe.from_mapping({}, "b")
    (Null, Void)
"""
import copy
import functools
from enum import IntEnum
from typing import Generic, TypeVar, final

from rich.pretty import pretty_repr
from rich.text import Text

from .faults import UnwrapError, trigger
from .utils import Unset

T = TypeVar("T")


class Variant(IntEnum):
    """
    Tag of the active Maybe variant.
    """
    VOID = 0
    NONE = 1
    SOME = 2


@final
class Maybe(Generic[T]):
    """
    Generic tri-state optional: Void, Null (the None variant) or Some(value).

    Construction
    - Maybe()                      -> Void
    - Maybe(Variant.NONE)          -> Null
    - Maybe(Variant.SOME, value)   -> Some(value)
    - Maybe.Some(value)            -> Some(value)
    - Maybe.from_optional(value)   -> Null or Some(value)

    Pattern matching
        match maybe:
            case Maybe(Variant.SOME, payload): ...
            case Maybe(Variant.NONE): ...
            case Maybe(Variant.VOID): ...
    """

    __slots__ = ("_variant", "_value")
    __match_args__ = ("variant", "payload")

    def __new__(cls, variant=Variant.VOID, value=Unset, /):
        variant = Variant(variant)
        if variant is Variant.SOME:
            if value is Unset:
                raise TypeError("Maybe() some-variant requires a value")
            return cls._make(variant, value)
        if value is not Unset:
            raise TypeError(f"Maybe() {variant.name.lower()}-variant takes no value")
        return cls._singleton(variant)

    @classmethod
    def _make(cls, variant, value):
        self = object.__new__(cls)
        object.__setattr__(self, "_variant", variant)
        object.__setattr__(self, "_value", value)
        return self

    @classmethod
    @functools.cache
    def _singleton(cls, variant):
        # Void and Null carry no payload; one instance each per process.
        return cls._make(variant, Unset)

    @classmethod
    def Some(cls, value, /):
        """
        Wrap a concrete value.
        """
        return cls(Variant.SOME, value)

    @classmethod
    def from_optional(cls, value, /):
        """
        Convert a binary optional: None becomes Null, anything else becomes Some(value).

        This never produces Void. A binary optional cannot express “the field was
        absent”, so callers must not use it to detect field omission.
        """
        if value is None:
            return cls(Variant.NONE)
        return cls(Variant.SOME, value)

    @classmethod
    def from_mapping(cls, mapping, key, /):
        """
        Decode one field of a plain mapping, driven by key presence.

        A missing key yields Void; a present key is converted with from_optional().
        """
        try:
            value = mapping[key]
        except KeyError:
            return cls(Variant.VOID)
        return cls.from_optional(value)

    @property
    def variant(self):
        return self._variant

    @property
    def value(self):
        """
        Payload of Some. Raises UnwrapError on Void and Null.
        """
        return self.unwrap()

    @property
    def payload(self):
        """
        Raw payload: the value of Some, Unset on Void and Null. Never raises.
        """
        return self._value

    def is_void(self):
        return self._variant is Variant.VOID

    def is_none(self):
        return self._variant is Variant.NONE

    def is_some(self):
        return self._variant is Variant.SOME

    def unwrap(self, default=Unset, /):
        """
        Return the payload of Some.

        On Void and Null the `default` is returned when given; otherwise UnwrapError is
        raised. None is a valid default.
        """
        if self._variant is Variant.SOME:
            return self._value
        if default is not Unset:
            return default
        trigger(UnwrapError(f"cannot unwrap {self!r}: no value is present"))

    def to_optional(self):
        """
        Collapse to a binary optional: Some(v) -> v, Null and Void -> None.
        """
        if self._variant is Variant.SOME:
            return self._value
        return None

    def clone(self):
        """
        Deep copy: the payload of Some is copied with copy.deepcopy; Void and Null are
        returned as-is.
        """
        return copy.deepcopy(self)

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        if self._variant is not Variant.SOME:
            return self
        return type(self)(Variant.SOME, copy.deepcopy(self._value, memo))

    def __reduce__(self):
        if self._variant is Variant.SOME:
            return Maybe, (Variant.SOME, self._value)
        return Maybe, (self._variant,)

    def __eq__(self, other):
        if not isinstance(other, Maybe):
            return NotImplemented
        if self._variant is not other._variant:
            return False
        return self._variant is not Variant.SOME or self._value == other._value

    def __hash__(self):
        return hash((Maybe, self._variant, self._value))

    def __bool__(self):
        return self._variant is Variant.SOME

    def __repr__(self):
        match self._variant:
            case Variant.VOID:
                return "Void"
            case Variant.NONE:
                return "Null"
            case _:
                return f"Some({self._value!r})"

    def __rich__(self):
        match self._variant:
            case Variant.VOID:
                return Text.assemble(("(", "yellow"), ("void", "red"), (")", "yellow"))
            case Variant.NONE:
                return Text("null", style="dim")
            case _:
                return Text.assemble(("Some", "bold green"), "(", pretty_repr(self._value), ")")

    def __setattr__(self, name, value):
        raise AttributeError(f"'Maybe' object is immutable (cannot set {name!r})")

    def __delattr__(self, name):
        raise AttributeError(f"'Maybe' object is immutable (cannot delete {name!r})")

    def __init_subclass__(cls, **options):
        raise TypeError("type 'Maybe' is not an acceptable base type")

    @classmethod
    def __get_pydantic_core_schema__(cls, source, handler):
        """
        pydantic hook: validate and serialize `Maybe[T]` through the schema of T.
        """
        from .serialization import core_schema_of
        return core_schema_of(source, handler)

    @classmethod
    def __get_pydantic_json_schema__(cls, schema, handler):
        from .serialization import json_schema_of
        return json_schema_of(schema, handler)


Void = Maybe(Variant.VOID)
Null = Maybe(Variant.NONE)
Some = Maybe.Some

# Variant spellings on the type itself: Maybe.Void / Maybe.Null / Maybe.Some(v).
Maybe.Void = Void
Maybe.Null = Null


__all__ = (
    "Maybe",
    "Variant",
    "Void",
    "Null",
    "Some",
)
