"""
Projections of schema nodes onto TypeScript.

Three independent projections of the same schema node are produced here:
the static type expression used in declarations, the coarse runtime field
tag used by the generated field metadata, and the literal default value of
a field. None of them caches anything; each call walks the node afresh.
"""

import json
from collections.abc import Mapping
from enum import Enum
from typing import Any, Final

from taggem.parser.resolver import resolve, resolve_schema
from taggem.parser.schema import (
    AllOfSchema,
    ArraySchema,
    EnumSchema,
    ObjectSchema,
    OneOfSchema,
    ReferenceSchema,
    SchemaNode,
)

# Namespace under which model types are imported by files other than apiModelTypes.ts
MODEL_TYPES_NAMESPACE: Final = "ApiModelTypes"

ANY_TYPE: Final = "any"
NUMBER_TYPE: Final = "number"
BOOLEAN_TYPE: Final = "boolean"
OPEN_RECORD_TYPE: Final = "Record<string, any>"
UNION_SEPARATOR: Final = " | "

# Literal texts of synthesized defaults
UNDEFINED_LITERAL: Final = "undefined"
EMPTY_STRING_LITERAL: Final = "''"
EMPTY_ARRAY_LITERAL: Final = "[]"
ZERO_LITERAL: Final = "0"


class FieldType(str, Enum):
    """Coarse runtime tag of a model field."""

    STRING = "STRING"
    NUMBER = "NUMBER"
    BOOLEAN = "BOOLEAN"
    ARRAY = "ARRAY"
    OBJECT = "OBJECT"
    ENUM = "ENUM"
    UNDEFINED = "UNDEFINED"


_FIELD_TYPES: Final = {
    "string": FieldType.STRING,
    "integer": FieldType.NUMBER,
    "number": FieldType.NUMBER,
    "boolean": FieldType.BOOLEAN,
    "array": FieldType.ARRAY,
    "object": FieldType.OBJECT,
}


def translate_type(schema: SchemaNode | None, *, is_external: bool = False) -> str:
    """Translate a schema node into a TypeScript type expression.

    Args:
        schema: The schema node; None stands for an undeclared schema.
        is_external: Qualify referenced model names with the model types
            namespace, for use outside the file declaring them.

    Returns:
        The type expression.
    """
    match schema:
        case None:
            return ANY_TYPE
        case ReferenceSchema(ref=ref):
            name = resolve(ref)
            return f"{MODEL_TYPES_NAMESPACE}.{name}" if is_external else name
        case EnumSchema():
            # Enums are declared on their own and never inlined
            return ANY_TYPE
        case OneOfSchema(alternatives=alternatives) if alternatives:
            return UNION_SEPARATOR.join(translate_type(alt, is_external=is_external) for alt in alternatives)
        case AllOfSchema(parts=(part,)):
            return translate_type(part, is_external=is_external)
        case ObjectSchema(properties=properties) if not properties:
            return OPEN_RECORD_TYPE
        case ArraySchema(items=items):
            return f"Array<{translate_type(items, is_external=is_external)}>"

    if schema.declared_type == "integer":
        return NUMBER_TYPE
    if schema.declared_type == "boolean":
        return BOOLEAN_TYPE
    return schema.declared_type or ANY_TYPE


def classify_field(schemas: Mapping[str, SchemaNode], schema: SchemaNode | None) -> FieldType:
    """Classify a schema node into its runtime field tag.

    References are resolved first; enums take priority over the declared
    type. An ``allOf`` classifies as ``OBJECT`` unless it wraps a single
    part, which is classified instead. Unrecognized shapes classify as
    ``UNDEFINED``.

    Args:
        schemas: All named schemas of the document.
        schema: The schema node to classify.

    Returns:
        The field tag.
    """
    if isinstance(schema, ReferenceSchema):
        schema = resolve_schema(schema.ref, schemas)
    if schema is None:
        return FieldType.UNDEFINED
    if isinstance(schema, EnumSchema):
        return FieldType.ENUM
    if isinstance(schema, AllOfSchema):
        if len(schema.parts) == 1:
            return classify_field(schemas, schema.parts[0])
        # Compositions are declared as models
        return FieldType.OBJECT
    return _FIELD_TYPES.get(schema.declared_type or "", FieldType.UNDEFINED)


def synthesize_default(schema: SchemaNode | None) -> str:
    """Produce a TypeScript literal usable as the default of a field.

    Only used when the schema declares no ``default`` of its own.

    Args:
        schema: The schema node.

    Returns:
        The literal text; ``undefined`` when no sensible default exists.
    """
    if isinstance(schema, OneOfSchema):
        return synthesize_default(schema.alternatives[0]) if schema.alternatives else UNDEFINED_LITERAL
    if schema is None:
        return UNDEFINED_LITERAL

    match schema.declared_type:
        case "integer" | "number":
            return to_ts_literal(schema.minimum) if schema.minimum is not None else ZERO_LITERAL
        case "string":
            return EMPTY_STRING_LITERAL
        case "array":
            return EMPTY_ARRAY_LITERAL
        case _:
            return UNDEFINED_LITERAL


def field_default(schema: SchemaNode) -> str:
    """Return the declared default of a field as a literal, else a synthesized one."""
    if schema.has_default:
        return to_ts_literal(schema.default)
    return synthesize_default(schema)


def field_minimum(schema: SchemaNode) -> str:
    """Return the lower bound of a field: ``minimum``, else ``minLength``."""
    return _bound(schema.minimum, schema.min_length)


def field_maximum(schema: SchemaNode) -> str:
    """Return the upper bound of a field: ``maximum``, else ``maxLength``."""
    return _bound(schema.maximum, schema.max_length)


def _bound(value: float | None, length: int | None) -> str:
    if value is not None:
        return to_ts_literal(value)
    if length is not None:
        return to_ts_literal(length)
    return UNDEFINED_LITERAL


def to_ts_literal(value: Any) -> str:  # noqa: ANN401
    """Render a document value as a TypeScript literal.

    Args:
        value: A value parsed from the document.

    Returns:
        The literal text, e.g. ``'abc'``, ``5``, ``true``, ``null`` or ``[1, 2]``.
    """
    if isinstance(value, str):
        return ts_string_literal(value)
    return json.dumps(value, default=str)


def ts_string_literal(text: str) -> str:
    """Format text as a single-quoted TypeScript string literal."""
    escaped = (
        text.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f"'{escaped}'"
