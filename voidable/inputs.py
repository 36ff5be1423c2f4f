"""
GraphQL input adapter for Maybe (optional; install the `graphql` extra).

Mapping
- argument not supplied           -> Void
- variable referenced, not given  -> Void
- explicit null                   -> Null
- any other value                 -> Some(value decoded by the wrapped input type)

Schema transparency
- A Maybe argument is declared with the wrapped type unchanged; introspection cannot tell
  it apart from a plain argument of that type. Only the decoding differs.

Encoding back is lossy on purpose: a GraphQL value literal has no “absent” state, so
Void and Null both become a null literal. This asymmetry is confined to this adapter;
pydantic encoding (voidable.serialization) keeps Void and Null apart.
"""
from graphql import GraphQLArgument, GraphQLError, Undefined
from graphql.language import NullValueNode, VariableNode, print_ast
from graphql.pyutils import inspect
from graphql.utilities import ast_from_value, coerce_input_value, value_from_ast

from .maybe import Maybe, Null, Void
from .utils import Unset


def type_name(type_, /):
    """
    Name of a Maybe input of `type_`: the wrapped type's own name, unchanged.
    """
    return str(type_)


def maybe_argument(type_, /, **options):
    """
    Declare a Maybe argument of `type_`.

    The argument gets no default value: graphql-core would substitute it for an omitted
    argument and Void could never be observed.
    """
    if "default_value" in options:
        raise TypeError("maybe_argument() got an unexpected keyword argument 'default_value'")
    return GraphQLArgument(type_, **options)


def parse_literal(node, type_, /, variables=None):
    """
    Decode a value literal (or its absence) into a Maybe.

    `node` is the argument's ValueNode, or None when the argument was not supplied.
    Invalid literals raise GraphQLError.
    """
    if node is None:
        return Void
    if isinstance(node, VariableNode):
        name = node.name.value
        if not variables or name not in variables:
            return Void
        # Variable values are coerced by graphql-core before execution.
        return Maybe.from_optional(variables[name])
    if isinstance(node, NullValueNode):
        return Null
    value = value_from_ast(node, type_, variables)
    if value is Undefined:
        raise GraphQLError(f"Expected value of type '{type_}', found {print_ast(node)}.", node)
    return Maybe.Some(value)


def parse_input(type_, /, value=Unset):
    """
    Decode an external input value (e.g. from a variables document) into a Maybe.

    Leave `value` out for an absent input. Coercion errors raise GraphQLError.
    """
    if value is Unset:
        return Void
    if value is None:
        return Null
    coerced = coerce_input_value(value, type_, on_error=_raise_input_error)
    if coerced is Undefined:
        raise GraphQLError(f"Expected value of type '{type_}', found {inspect(value)}.")
    return Maybe.Some(coerced)


def _raise_input_error(path, invalid_value, error):
    # graphql-core 3.3 collects coercion errors and returns Undefined by default.
    raise error


def from_arguments(arguments, name, /):
    """
    Read a Maybe from resolver keyword arguments.

    graphql-core only passes arguments that were supplied (already coerced), so a missing
    key is Void and an explicit None is Null.
    """
    return Maybe.from_mapping(arguments, name)


def to_literal(maybe, type_, /):
    """
    Encode a Maybe as a value literal: Some(v) through `type_`, Void and Null as null.
    """
    if maybe.is_some():
        return ast_from_value(maybe.unwrap(), type_)
    return NullValueNode()


__all__ = (
    "type_name",
    "maybe_argument",
    "parse_literal",
    "parse_input",
    "from_arguments",
    "to_literal",
)
