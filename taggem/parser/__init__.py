"""
OpenAPI Parser Module for TypeScript Client Generation

This module loads OpenAPI/Swagger documents, classifies their schemas into
explicit variants, resolves references, unifies compositions and extracts
the operations needed for client generation.
"""

from .loader import DocumentLoadError, load_document, parse_document_text, read_source
from .oas_parser import (
    OASParser,
    Operation,
    Parameter,
    ParsedDocument,
    extract_operations,
    generate_operation_id,
    group_operations,
    interpolate_path,
)
from .resolver import CyclicSchemaError, SchemaReferenceError, resolve, resolve_schema
from .schema import (
    AllOfSchema,
    ArraySchema,
    EnumSchema,
    ObjectSchema,
    OneOfSchema,
    PrimitiveSchema,
    ReferenceSchema,
    SchemaNode,
    UnknownSchema,
    parse_schema,
)
from .unifier import merge_schemas, unify

__all__ = [
    "AllOfSchema",
    "ArraySchema",
    "CyclicSchemaError",
    "DocumentLoadError",
    "EnumSchema",
    "OASParser",
    "ObjectSchema",
    "OneOfSchema",
    "Operation",
    "Parameter",
    "ParsedDocument",
    "PrimitiveSchema",
    "ReferenceSchema",
    "SchemaNode",
    "SchemaReferenceError",
    "UnknownSchema",
    "extract_operations",
    "generate_operation_id",
    "group_operations",
    "interpolate_path",
    "load_document",
    "merge_schemas",
    "parse_document_text",
    "parse_schema",
    "read_source",
    "resolve",
    "resolve_schema",
    "unify",
]
