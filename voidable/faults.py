"""
Voidable faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every issue the package surfaces.
  Codes are grouped by domain to keep messages consistent and logs searchable.
- MaybeException / MaybeWarning: base types that carry message + options and know how
  to render themselves in a friendly, actionable way.
- trigger(): central entry point to surface any fault with per-call options.
- getdoc(): optional description lookup for a code from the host application.

What is (and is not) a fault here
- Programmer errors around Maybe are faults: serializing Void without a skip predicate,
  unwrapping an empty value, declaring a Maybe field without the Void default.
- Data errors are not: a payload that does not validate as the wrapped type is reported by
  the host framework (pydantic.ValidationError, graphql.GraphQLError) and tagged with the
  field there. This module never wraps or swallows those.

Integration
- Library code calls trigger(fault, **ctx). Exceptions are raised and warnings go through
  warnings.warn, attributed to the first frame outside this package. Both render
  themselves through rich (`__rich__`) for hosts that print them.
- Hosts customize presentation through dunders in __main__: __styles__, __codes__,
  __docs__ and __prog__.
"""
import copy
import os
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, UnsetType, coalesce

console = Console(stderr=True)

# Frames under this prefix are skipped when a warning is attributed to its caller.
PACKAGE = os.path.dirname(__file__) + os.sep


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - errors (13xxx)
      • MAYBE_ERROR (generic), VOID_SERIALIZATION, UNWRAP_EMPTY
    - warnings (23xxx)
      • MAYBE_WARNING (generic), MISSING_VOID_DEFAULT, MISSING_SKIP_PREDICATE

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- errors (13xxx) ---
    MAYBE_ERROR                 = 13100
    VOID_SERIALIZATION          = 13101
    UNWRAP_EMPTY                = 13102

    # --- warnings (23xxx) ---
    MAYBE_WARNING               = 23100
    MISSING_VOID_DEFAULT        = 23101
    MISSING_SKIP_PREDICATE      = 23102

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__ to override
        numeric ids with friendlier labels. when no mapping is present, the numeric
        value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette):
    """
    Shared rich renderer for exceptions and warnings.

    `palette` holds the default styles of the fault family; the host may override any key
    through __styles__ in __main__.
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", True)
    fancy = options.get("fancy", False)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), styles[style])

    header = Text.assemble(
        "[ ",
        text(getattr(main, "__prog__", "voidable"), "prog-name"),
        " | ",
        text(options["code"].normalize(), "code"),
        " | ",
        text(options["title"].title(), "title"),
        " ]"
    )
    message = text(coalesce(fault.message, ""), "message")
    hint = Text.assemble(text(" → ", "hint-arrow"), text(options.get("hint"), "hint"))

    if fancy:
        width = console.width - 4
        try:
            width = int(width * options["ratio"])
        except KeyError:
            width = None
        return Panel(Group(message, hint), title=header, title_align="left", width=width)

    return Group(header, message, hint)


class MaybeException(Exception):
    """
    Base class for every error raised by the package.

    Options are stored read-only; `code`, `title` and `hint` default to the class-level
    values and can be overridden per trigger.
    """

    code = FaultCode.MAYBE_ERROR
    title = "maybe error"
    hint = None

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | UnsetType)
        self.message = message
        self.options = MappingProxyType({
            "code": self.code,
            "title": self.title,
            "hint": self.hint,
        } | options)

    def __str__(self):
        return coalesce(self.message, self.options["title"])

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "title": "bold #FF4DA6",
            "message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        })

    def __trigger__(self) -> None:
        raise self from None

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class VoidSerializationError(MaybeException):
    """
    A Void value reached the serializer: the field lacks its skip predicate.
    """

    code = FaultCode.VOID_SERIALIZATION
    title = "void serialization"
    hint = "declare the field with maybe_field(), or Field(default=Void, exclude_if=Maybe.is_void)"


class UnwrapError(MaybeException):
    """
    The payload of a Void or Null value was requested.
    """

    code = FaultCode.UNWRAP_EMPTY
    title = "empty unwrap"
    hint = "check is_some() first, or pass unwrap(default=...)"


class MaybeWarning(Warning):
    """
    Base class for every warning issued by the package.
    """

    code = FaultCode.MAYBE_WARNING
    title = "maybe warning"
    hint = None

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | UnsetType)
        self.message = message
        self.options = MappingProxyType({
            "code": self.code,
            "title": self.title,
            "hint": self.hint,
        } | options)

    def __str__(self):
        return coalesce(self.message, self.options["title"])

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",
            "title": "bold #FFC2E0",
            "message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        })

    def __trigger__(self) -> None:
        warnings.warn(
            self,
            stacklevel=self.options.get("stacklevel", 2),
            skip_file_prefixes=self.options.get("skip", (PACKAGE,)),
        )

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MissingVoidDefaultWarning(MaybeWarning):
    """
    A Maybe field does not default to Void, so an absent field cannot decode to Void.
    """

    code = FaultCode.MISSING_VOID_DEFAULT
    title = "missing void default"
    hint = "declare the field with maybe_field(), or Field(default=Void, ...)"


class MissingSkipPredicateWarning(MaybeWarning):
    """
    A Maybe field has no skip predicate, so serializing a Void value will fail.
    """

    code = FaultCode.MISSING_SKIP_PREDICATE
    title = "missing skip predicate"
    hint = "declare the field with maybe_field(), or Field(exclude_if=Maybe.is_void, ...)"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - exceptions are raised; warnings are issued through the warnings module, skipping
      frames under the `skip` prefixes (this package by default).

    typical options
    - fancy, colorful, ratio, stacklevel, skip, title, code, hint, and any other
      context the reporter may want to keep (e.g., model/field).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys are
    FaultCode instances and values are short documentation strings. when not found,
    returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "MaybeException",
    "VoidSerializationError",
    "UnwrapError",
    "MaybeWarning",
    "MissingVoidDefaultWarning",
    "MissingSkipPredicateWarning",
    "trigger",
    "getdoc",
)
