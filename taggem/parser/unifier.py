"""
Unification of composite schemas.

``allOf`` compositions are flattened into one synthetic object schema by a
left-to-right deep merge. Two rules shape the merge: properties present on
both sides are merged recursively with the later side winning, and an
array-typed property present on both sides becomes an array whose items are
a ``oneOf`` over both item schemas, so a later part widens the element type
instead of replacing it.
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import replace

from taggem.parser.resolver import ref_name, resolve_schema
from taggem.parser.schema import (
    METADATA_FIELDS,
    NO_DEFAULT,
    AllOfSchema,
    ArraySchema,
    ObjectSchema,
    OneOfSchema,
    ReferenceSchema,
    SchemaNode,
    UnknownSchema,
)


def unify(
    schemas: Mapping[str, SchemaNode],
    parts: Sequence[SchemaNode],
    visited: Iterable[str] = (),
) -> ObjectSchema:
    """Merge the parts of a composition into one object schema.

    Args:
        schemas: All named schemas of the document.
        parts: The composed schemas, in declaration order.
        visited: Schema names already on the caller's resolution path.

    Returns:
        The synthesized object schema.

    Raises:
        SchemaReferenceError: If a part references an undefined schema.
        CyclicSchemaError: If a part leads back to a schema on the path.
    """
    path = frozenset(visited)
    merged = ObjectSchema(declared_type="object")
    for part in parts:
        merged = _merge_into_object(merged, _concrete(schemas, part, path))
    return merged


def merge_schemas(left: SchemaNode, right: SchemaNode) -> SchemaNode:
    """Deep-merge two schemas, ``right`` taking precedence.

    A ``right`` schema carrying only annotations refines ``left``. One of the
    same variant keeps its own content and merges the annotations of both.
    Any other ``right`` schema replaces ``left``.

    Args:
        left: The earlier schema.
        right: The later schema.

    Returns:
        The merged schema.
    """
    if isinstance(left, ArraySchema) and isinstance(right, ArraySchema):
        return ArraySchema(items=_widen(left.items, right.items), **_merged_metadata(left, right))

    if isinstance(left, ObjectSchema) and isinstance(right, ObjectSchema):
        return _merge_objects(left, right)

    # An annotation-only part refines the earlier schema instead of replacing it
    if isinstance(right, UnknownSchema) and right.declared_type is None:
        return replace(left, **_merged_metadata(left, right))

    if type(left) is type(right):
        return replace(right, **_merged_metadata(left, right))

    return right


def _concrete(
    schemas: Mapping[str, SchemaNode],
    part: SchemaNode,
    path: frozenset[str],
) -> SchemaNode:
    """Resolve a composition part down to a schema that can be merged."""
    if isinstance(part, ReferenceSchema):
        name = ref_name(part.ref)
        part = resolve_schema(part.ref, schemas, path)
        path = path | {name}

    if isinstance(part, OneOfSchema):
        return unify(schemas, part.alternatives, path)
    if isinstance(part, AllOfSchema):
        return unify(schemas, part.parts, path)
    return part


def _merge_into_object(merged: ObjectSchema, part: SchemaNode) -> ObjectSchema:
    if isinstance(part, ObjectSchema):
        return _merge_objects(merged, part)
    # A non-object part only contributes its annotations
    metadata = _merged_metadata(merged, part)
    metadata["declared_type"] = "object"
    return replace(merged, **metadata)


def _merge_objects(left: ObjectSchema, right: ObjectSchema) -> ObjectSchema:
    properties = dict(left.properties)
    for name, prop in right.properties.items():
        properties[name] = merge_schemas(properties[name], prop) if name in properties else prop
    return ObjectSchema(
        properties=properties,
        required=left.required | right.required,
        **_merged_metadata(left, right),
    )


def _widen(left: SchemaNode | None, right: SchemaNode | None) -> SchemaNode | None:
    if left is None:
        return right
    if right is None:
        return left
    return OneOfSchema(alternatives=(left, right))


def _merged_metadata(left: SchemaNode, right: SchemaNode) -> dict:
    metadata = {}
    for name in METADATA_FIELDS:
        left_value = getattr(left, name)
        right_value = getattr(right, name)
        if name == "extensions":
            metadata[name] = {**left_value, **right_value}
        elif right_value is None or right_value is NO_DEFAULT or right_value is False:
            metadata[name] = left_value
        else:
            metadata[name] = right_value
    return metadata
