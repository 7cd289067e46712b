"""
Schema node variants for OpenAPI documents.

Every schema fragment of a document is classified exactly once, when it is
parsed, into one of a closed set of variants. Downstream code matches on the
variant instead of probing the raw mapping for ``$ref``, ``enum``, ``oneOf``,
``allOf`` or ``type`` over and over.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Final

PRIMITIVE_TYPES: Final = frozenset({"string", "number", "integer", "boolean"})

# Vendor extension carrying the unit of measure of a numeric property
UNITS_EXTENSION: Final = "x-units"


class _NoDefault:
    """Marker for a schema that declares no ``default``."""

    def __repr__(self) -> str:
        return "NO_DEFAULT"


NO_DEFAULT: Final = _NoDefault()


@dataclass(frozen=True, kw_only=True)
class SchemaNode:
    """Fields shared by every schema variant."""

    declared_type: str | None = None
    description: str | None = None
    default: Any = NO_DEFAULT
    minimum: float | None = None
    maximum: float | None = None
    min_length: int | None = None
    max_length: int | None = None
    read_only: bool = False
    format: str | None = None
    extensions: dict[str, Any] = field(default_factory=dict)

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT

    @property
    def units(self) -> str | None:
        units = self.extensions.get(UNITS_EXTENSION)
        return str(units) if units is not None else None


@dataclass(frozen=True, kw_only=True)
class ReferenceSchema(SchemaNode):
    ref: str


@dataclass(frozen=True, kw_only=True)
class PrimitiveSchema(SchemaNode):
    """A ``string``, ``number``, ``integer`` or ``boolean`` schema."""


@dataclass(frozen=True, kw_only=True)
class ArraySchema(SchemaNode):
    items: SchemaNode | None = None


@dataclass(frozen=True, kw_only=True)
class ObjectSchema(SchemaNode):
    properties: dict[str, SchemaNode] = field(default_factory=dict)
    required: frozenset[str] = frozenset()


@dataclass(frozen=True, kw_only=True)
class EnumSchema(SchemaNode):
    """A closed set of literal values; ``declared_type`` is the base type."""

    values: tuple[Any, ...] = ()


@dataclass(frozen=True, kw_only=True)
class OneOfSchema(SchemaNode):
    alternatives: tuple[SchemaNode, ...] = ()


@dataclass(frozen=True, kw_only=True)
class AllOfSchema(SchemaNode):
    parts: tuple[SchemaNode, ...] = ()


@dataclass(frozen=True, kw_only=True)
class UnknownSchema(SchemaNode):
    """A schema matching no recognized shape."""


# Names of the fields every variant inherits from SchemaNode
METADATA_FIELDS: Final = tuple(f.name for f in fields(SchemaNode))


def _declared_type(raw: dict[str, Any]) -> str | None:
    schema_type = raw.get("type")
    # OpenAPI 3.1 allows a list of types, e.g. ["string", "null"]
    if isinstance(schema_type, list):
        non_null = [t for t in schema_type if t != "null"]
        return str(non_null[0]) if non_null else None
    return str(schema_type) if schema_type is not None else None


def _metadata(raw: dict[str, Any]) -> dict[str, Any]:
    """Extract the fields shared by every variant from a raw schema."""
    return {
        "declared_type": _declared_type(raw),
        "description": raw.get("description"),
        "default": raw["default"] if "default" in raw else NO_DEFAULT,
        "minimum": raw.get("minimum"),
        "maximum": raw.get("maximum"),
        "min_length": raw.get("minLength"),
        "max_length": raw.get("maxLength"),
        "read_only": bool(raw.get("readOnly", False)),
        "format": raw.get("format"),
        "extensions": {key: value for key, value in raw.items() if key.startswith("x-")},
    }


def parse_schema(raw: Any) -> SchemaNode:  # noqa: ANN401
    """Classify a raw schema mapping into its variant.

    The first matching rule wins: ``$ref`` without an inline ``type``,
    ``enum``, ``oneOf``/``anyOf``, ``allOf``, ``array``, ``object`` (or bare
    ``properties``), primitive types, and finally the unknown shape.

    Args:
        raw: The schema mapping as found in the document.

    Returns:
        The parsed schema node.
    """
    if not isinstance(raw, dict):
        return UnknownSchema()

    metadata = _metadata(raw)

    if "$ref" in raw and "type" not in raw:
        return ReferenceSchema(ref=str(raw["$ref"]), **metadata)

    if "enum" in raw:
        return EnumSchema(values=tuple(raw["enum"] or ()), **metadata)

    for key in ("oneOf", "anyOf"):
        if key in raw:
            alternatives = tuple(parse_schema(alt) for alt in raw[key] or ())
            return OneOfSchema(alternatives=alternatives, **metadata)

    if "allOf" in raw:
        parts = [parse_schema(part) for part in raw["allOf"] or ()]
        # Properties declared next to allOf act as one more part
        if "properties" in raw:
            sibling = {key: value for key, value in raw.items() if key != "allOf"}
            parts.append(parse_schema(sibling))
        return AllOfSchema(parts=tuple(parts), **metadata)

    schema_type = metadata["declared_type"]

    if schema_type == "array":
        items = parse_schema(raw["items"]) if "items" in raw else None
        return ArraySchema(items=items, **metadata)

    if schema_type == "object" or "properties" in raw:
        metadata["declared_type"] = "object"
        properties = {str(name): parse_schema(prop) for name, prop in (raw.get("properties") or {}).items()}
        return ObjectSchema(
            properties=properties,
            required=frozenset(raw.get("required") or ()),
            **metadata,
        )

    if schema_type in PRIMITIVE_TYPES:
        return PrimitiveSchema(**metadata)

    return UnknownSchema(**metadata)


def parse_schemas(raw_schemas: dict[str, Any] | None) -> dict[str, SchemaNode]:
    """Parse a named schema table, preserving declaration order."""
    return {str(name): parse_schema(raw) for name, raw in (raw_schemas or {}).items()}


def with_metadata(node: SchemaNode, source: SchemaNode) -> SchemaNode:
    """Copy the shared fields set on ``source`` onto ``node``.

    Used to keep the description and annotations of an ``allOf`` schema on
    the object synthesized from its parts.
    """
    overrides = {name: getattr(source, name) for name in METADATA_FIELDS if _is_set(getattr(source, name))}
    overrides.pop("declared_type", None)
    return replace(node, **overrides) if overrides else node


def _is_set(value: Any) -> bool:  # noqa: ANN401
    return value is not None and value is not NO_DEFAULT and value is not False and value != {}
