"""
pydantic integration for Maybe.

Decode
- `Maybe[T]` validates through T: null becomes Null, anything else is validated as T and
  wrapped in Some. A Some passed in keeps its variant, so `Some(None)` is never turned
  into Null. A payload that is not a valid T fails with pydantic's own
  ValidationError, located at the originating field.
- Maybe never sees an absent field. The field's default supplies Void, so every
  `Maybe[T]` field must default to Void.

Encode
- Some(v) serializes exactly as T serializes v; Null serializes as null.
- Void must never reach the serializer: the field has to be skipped when void, which is
  what `exclude_if=Maybe.is_void` does. A Void that slips through raises
  VoidSerializationError (surfaced by pydantic as PydanticSerializationError).

Declaring fields
    class Patch(VoidableModel):
        name: str
        nickname: Maybe[str] = maybe_field()

maybe_field() wires both halves of the contract at once. VoidableModel audits its fields
at class creation and warns about Maybe fields declared without them.
"""
import os
from typing import Any, get_args, get_origin

import pydantic
from pydantic import BaseModel, Field
from pydantic_core import core_schema

from .faults import PACKAGE, MissingSkipPredicateWarning, MissingVoidDefaultWarning, VoidSerializationError, trigger
from .maybe import Maybe, Null, Variant, Void
from .utils import Unset, rename

PYDANTIC = os.path.dirname(pydantic.__file__) + os.sep


def core_schema_of(source, handler):
    """
    Build the pydantic-core schema for `Maybe[T]` (bare `Maybe` validates the payload as Any).
    """
    arguments = get_args(source)
    payload = handler.generate_schema(arguments[0] if arguments else Any)

    @rename("Maybe.validate")
    def validate(value, validator):
        if value is None:
            return Null
        # Python-mode input may already be a Maybe; the payload of Some is re-validated as T.
        if isinstance(value, Maybe):
            if not value.is_some():
                return value
            value = value.unwrap()
        return Maybe.Some(validator(value))

    @rename("Maybe.serialize")
    def serialize(value, serializer):
        if not isinstance(value, Maybe):
            return serializer(value)
        match value.variant:
            case Variant.SOME:
                return serializer(value.unwrap())
            case Variant.NONE:
                return None
            case _:
                trigger(VoidSerializationError(
                    "a Void value reached the serializer; Maybe fields need to be declared with "
                    "maybe_field(), or Field(default=Void, exclude_if=Maybe.is_void)"
                ))

    return core_schema.no_info_wrap_validator_function(
        validate,
        payload,
        serialization=core_schema.wrap_serializer_function_ser_schema(serialize, schema=payload, info_arg=False),
    )


def json_schema_of(schema, handler):
    """
    JSON schema of `Maybe[T]`, the same in both modes: T or null. Void has no wire form.
    """
    return handler(core_schema.nullable_schema(schema["schema"]))


def _void():
    return Void


def maybe_field(**options):
    """
    Declare a Maybe field: default Void, skipped on serialization while void.

    The default is produced by a factory so that JSON schema generation never tries to
    encode Void; the field is simply not required. Any other pydantic Field option (alias,
    description, ...) passes through; `default`, `default_factory` and `exclude_if` are
    owned by this helper.
    """
    for name in ("default", "default_factory", "exclude_if"):
        if name in options:
            raise TypeError(f"maybe_field() got an unexpected keyword argument {name!r}")
    return Field(default_factory=_void, exclude_if=Maybe.is_void, **options)


def _is_maybe(annotation):
    return annotation is Maybe or get_origin(annotation) is Maybe


def _default_of(info):
    if info.default_factory is None:
        return info.default
    if info.default_factory_takes_validated_data:
        return Unset
    return info.default_factory()


def audit(model, /):
    """
    Check the Maybe fields of a pydantic model (or pydantic dataclass).

    Issues MissingVoidDefaultWarning for a Maybe field whose default is not Void, and
    MissingSkipPredicateWarning for one without exclude_if. Returns the issued warnings,
    which point at the code that called audit() or defined the model.
    """
    issued = []
    for name, info in getattr(model, "__pydantic_fields__", {}).items():
        if not _is_maybe(info.annotation):
            continue
        if _default_of(info) is not Void:
            issued.append(MissingVoidDefaultWarning(
                f"{model.__name__}.{name} does not default to Void; an absent field cannot decode to Void",
                model=model.__name__,
                field=name,
            ))
        if getattr(info, "exclude_if", None) is None:
            issued.append(MissingSkipPredicateWarning(
                f"{model.__name__}.{name} is not skipped when void; serializing a Void value will fail",
                model=model.__name__,
                field=name,
            ))
    for warning in issued:
        trigger(warning, skip=(PACKAGE, PYDANTIC))
    return issued


class VoidableModel(BaseModel):
    """
    Base model that audits its Maybe fields when a subclass is created.
    """

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs):
        super().__pydantic_init_subclass__(**kwargs)
        audit(cls)


__all__ = (
    "maybe_field",
    "audit",
    "VoidableModel",
)
