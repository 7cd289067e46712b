"""Tests for reference resolution."""

import pytest

from taggem.parser.resolver import CyclicSchemaError, SchemaReferenceError, ref_name, resolve, resolve_schema
from taggem.parser.schema import EnumSchema, ObjectSchema, parse_schemas

_SCHEMAS = parse_schemas(
    {
        "pet_store": {"type": "object", "properties": {"name": {"type": "string"}}},
        "Alias": {"$ref": "#/components/schemas/AliasOfAlias"},
        "AliasOfAlias": {"$ref": "#/components/schemas/Status"},
        "Status": {"type": "string", "enum": ["on", "off"]},
        "Loop": {"$ref": "#/components/schemas/LoopBack"},
        "LoopBack": {"$ref": "#/components/schemas/Loop"},
    }
)


class TestResolve:
    """Test reference name extraction."""

    def test_trailing_segment_in_pascal_case(self) -> None:
        assert resolve("#/components/schemas/pet_store") == "PetStore"

    def test_swagger_definitions(self) -> None:
        assert resolve("#/definitions/Pet") == "Pet"

    def test_checks_presence_when_given_schemas(self) -> None:
        assert resolve("#/components/schemas/pet_store", _SCHEMAS) == "PetStore"
        with pytest.raises(SchemaReferenceError):
            resolve("#/components/schemas/Missing", _SCHEMAS)

    def test_external_reference_rejected(self) -> None:
        """Multi-file references are not supported."""
        with pytest.raises(SchemaReferenceError):
            ref_name("other.yaml#/components/schemas/Pet")


class TestResolveSchema:
    """Test schema lookup through reference chains."""

    def test_direct(self) -> None:
        node = resolve_schema("#/components/schemas/pet_store", _SCHEMAS)
        assert isinstance(node, ObjectSchema)

    def test_follows_chains(self) -> None:
        node = resolve_schema("#/components/schemas/Alias", _SCHEMAS)
        assert isinstance(node, EnumSchema)

    def test_missing_schema(self) -> None:
        with pytest.raises(SchemaReferenceError, match="Missing"):
            resolve_schema("#/components/schemas/Missing", _SCHEMAS)

    def test_cycle_detected(self) -> None:
        """Mutually referencing schemas fail instead of looping."""
        with pytest.raises(CyclicSchemaError):
            resolve_schema("#/components/schemas/Loop", _SCHEMAS)

    def test_visited_names_count_as_path(self) -> None:
        with pytest.raises(CyclicSchemaError):
            resolve_schema("#/components/schemas/Status", _SCHEMAS, visited={"Status"})
