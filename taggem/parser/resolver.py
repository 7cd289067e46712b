"""
Reference resolution for local schema references.

References are resolved against the named schema table of the document
(``components.schemas``, or ``definitions`` for Swagger 2 documents).
"""

from collections.abc import Iterable, Mapping
from typing import Final

from taggem.parser.schema import ReferenceSchema, SchemaNode
from taggem.utils.string_case import pascalcase

_LOCAL_REFERENCE_PREFIX: Final = "#/"


class SchemaReferenceError(LookupError):
    """A reference names a schema missing from the schema table."""


class CyclicSchemaError(SchemaReferenceError):
    """A reference chain or composition re-enters a schema already on its path."""


def ref_name(ref: str) -> str:
    """Extract the schema name from an OpenAPI $ref string.

    Args:
        ref: The $ref value (e.g., "#/components/schemas/Model").

    Returns:
        The schema name as declared (e.g., "Model").

    Raises:
        SchemaReferenceError: If the reference points outside the document.
    """
    if not ref.startswith(_LOCAL_REFERENCE_PREFIX):
        msg = f"Unsupported reference {ref!r}: only local references are resolved"
        raise SchemaReferenceError(msg)
    return ref.rsplit("/", 1)[-1]


def resolve(ref: str, schemas: Mapping[str, SchemaNode] | None = None) -> str:
    """Return the generated type name for a reference.

    Args:
        ref: The $ref value.
        schemas: When given, the schema table the name must be present in.

    Returns:
        The PascalCase name of the referenced schema.
    """
    name = ref_name(ref)
    if schemas is not None and name not in schemas:
        msg = f"Schema {name!r} referenced by {ref!r} is not defined"
        raise SchemaReferenceError(msg)
    return pascalcase(name)


def resolve_schema(
    ref: str,
    schemas: Mapping[str, SchemaNode],
    visited: Iterable[str] = (),
) -> SchemaNode:
    """Look up a referenced schema, following chained references.

    Args:
        ref: The $ref value.
        schemas: All named schemas of the document.
        visited: Schema names already on the caller's resolution path.

    Returns:
        The first schema in the chain that is not itself a reference.

    Raises:
        SchemaReferenceError: If a schema in the chain is not defined.
        CyclicSchemaError: If the chain re-enters a schema on the path.
    """
    path = set(visited)
    name = ref_name(ref)

    while True:
        if name in path:
            msg = f"Cyclic schema reference through {name!r}"
            raise CyclicSchemaError(msg)
        path.add(name)

        try:
            node = schemas[name]
        except KeyError:
            msg = f"Schema {name!r} referenced by {ref!r} is not defined"
            raise SchemaReferenceError(msg) from None

        if not isinstance(node, ReferenceSchema):
            return node
        name = ref_name(node.ref)
