"""
Template contexts for the generated TypeScript client.

Three independent contexts are built from a parsed document:

- one service context per operation bucket, driving the request functions;
- the model types context, driving the model/enum/union declarations;
- the model runtime context, driving the runtime field metadata records.

Each builder is a pure function of the parsed document, so callers are free
to build (and write) them in any order.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Final

from taggem.generator.type_mapping import (
    ANY_TYPE,
    FieldType,
    classify_field,
    field_default,
    field_maximum,
    field_minimum,
    to_ts_literal,
    translate_type,
)
from taggem.parser.oas_parser import (
    DEFAULT_SERVICE_NAME,
    Operation,
    Parameter,
    ParsedDocument,
    group_operations,
)
from taggem.parser.resolver import resolve_schema
from taggem.parser.schema import (
    AllOfSchema,
    EnumSchema,
    ObjectSchema,
    OneOfSchema,
    ReferenceSchema,
    SchemaNode,
    with_metadata,
)
from taggem.parser.unifier import unify
from taggem.utils.string_case import camelcase, constcase, normalize_ts_identifier, pascalcase

# Location of apiModelTypes relative to a service directory
TYPES_DIRECTORY: Final = ".."

# Description used for parameters that declare none
PARAM_DESCRIPTION_STUB: Final = "stub"

# Key used for enum members whose value yields no usable identifier
_EMPTY_ENUM_KEY: Final = "EMPTY"


@dataclass
class SchemaPartition:
    """Named schemas split by the declaration they produce."""

    models: dict[str, SchemaNode] = field(default_factory=dict)
    enums: dict[str, EnumSchema] = field(default_factory=dict)
    unions: dict[str, OneOfSchema] = field(default_factory=dict)


def partition_schemas(schemas: Mapping[str, SchemaNode]) -> SchemaPartition:
    """Split named schemas into models, enums and unions.

    ``allOf`` schemas are unified into a single object schema and land among
    the models.

    Args:
        schemas: All named schemas of the document.

    Returns:
        The partition, each part in declaration order.
    """
    partition = SchemaPartition()
    for name, node in schemas.items():
        match node:
            case EnumSchema():
                partition.enums[name] = node
            case OneOfSchema():
                partition.unions[name] = node
            case AllOfSchema(parts=parts):
                partition.models[name] = with_metadata(unify(schemas, parts, visited={name}), node)
            case _:
                partition.models[name] = node
    return partition


# Service functions


def build_parameter_context(parameter: Parameter) -> dict[str, Any]:
    """Build the template context of one function parameter."""
    return {
        "PARAM_NAME": parameter.name,
        "PARAM_TYPE": translate_type(parameter.schema, is_external=True),
        "PARAM_DESCRIPTION": parameter.description or PARAM_DESCRIPTION_STUB,
        "PARAM_REQUIRED": parameter.required,
    }


def build_function_context(operation: Operation) -> dict[str, Any]:
    """Build the template context of one request function."""
    return {
        "FUNCTION_SUMMARY": operation.summary,
        "FUNCTION_DESCRIPTION": operation.description,
        "FUNCTION_NAME": normalize_ts_identifier(operation.function_name),
        "FUNCTION_PARAMS": [build_parameter_context(p) for p in operation.path_parameters],
        "QUERY_PARAMS": [build_parameter_context(p) for p in operation.query_parameters],
        "HAS_PAYLOAD": operation.has_request_body,
        "FUNCTION_PAYLOAD": translate_type(operation.request_body, is_external=True)
        if operation.request_body
        else ANY_TYPE,
        "FUNCTION_RESPONSE": translate_type(operation.response, is_external=True) if operation.response else ANY_TYPE,
        "REQUEST_METHOD": operation.method,
        "REQUEST_PATH": operation.interpolated_path,
    }


def build_service_contexts(
    document: ParsedDocument,
    *,
    is_monolith: bool = True,
    service_name: str | None = None,
    axios_version: int = 0,
) -> dict[str, dict[str, Any]]:
    """Build one service context per operation bucket.

    Args:
        document: The parsed document.
        is_monolith: Bucket operations by their first tag; otherwise use a
            single bucket named after ``service_name``.
        service_name: Bucket name in single-service mode.
        axios_version: Major version of the Axios library targeted.

    Returns:
        Service contexts keyed by their camelCase directory name.
    """
    buckets = group_operations(document.operations, is_monolith=is_monolith, service_name=service_name)
    contexts: dict[str, dict[str, Any]] = {}

    for bucket, operations in buckets.items():
        directory = camelcase(bucket) or DEFAULT_SERVICE_NAME
        service = contexts.setdefault(
            directory,
            {
                "SERVICE_NAME": pascalcase(bucket),
                "TYPES_DIRECTORY": TYPES_DIRECTORY,
                "BASE_PATH": document.base_path,
                "AXIOS_V1": axios_version >= 1,
                "FUNCTIONS": [],
            },
        )
        service["FUNCTIONS"].extend(build_function_context(op) for op in operations)

    for service in contexts.values():
        _suffix_repeats(service["FUNCTIONS"], "FUNCTION_NAME")

    return contexts


# Model declarations


def _object_properties(node: SchemaNode) -> list[tuple[str, SchemaNode, bool]]:
    if not isinstance(node, ObjectSchema):
        return []
    return [(name, prop, name in node.required) for name, prop in node.properties.items()]


def build_enum_member_context(value: Any) -> dict[str, str]:  # noqa: ANN401
    """Build the key and literal of one enum member."""
    if isinstance(value, str):
        key = constcase(value) or _EMPTY_ENUM_KEY
    else:
        key = f"VALUE_{constcase(str(value)) or _EMPTY_ENUM_KEY}"
    return {"ENUM_KEY": normalize_ts_identifier(key), "ENUM_VALUE": to_ts_literal(value)}


def build_model_types_context(document: ParsedDocument) -> dict[str, Any]:
    """Build the context declaring every model, enum and union type.

    Args:
        document: The parsed document.

    Returns:
        The context with ``MODELS``, ``ENUMS`` and ``TYPES``.
    """
    partition = partition_schemas(document.schemas)

    models = [
        {
            "MODEL_NAME": pascalcase(name),
            "MODEL_DESCRIPTION": node.description,
            "MODEL_PROPERTIES": [
                {
                    "PROPERTY_NAME": prop_name,
                    "PROPERTY_DESCRIPTION": prop.description,
                    "PROPERTY_TYPE": translate_type(prop),
                    "PROPERTY_REQUIRED": required,
                    "PROPERTY_READ_ONLY": prop.read_only,
                }
                for prop_name, prop, required in _object_properties(node)
            ],
        }
        for name, node in partition.models.items()
    ]

    enums = [
        {
            "ENUM_NAME": pascalcase(name),
            "ENUM_DESCRIPTION": node.description,
            "ENUM_VALUES": _suffix_repeats(
                [build_enum_member_context(value) for value in node.values if _is_enum_initializer(value)],
                "ENUM_KEY",
            ),
        }
        for name, node in partition.enums.items()
    ]

    types = [
        {
            "TYPE_NAME": pascalcase(name),
            "TYPE_DESCRIPTION": node.description,
            "TYPE_VALUE": translate_type(node),
        }
        for name, node in partition.unions.items()
    ]

    return {"MODELS": models, "ENUMS": enums, "TYPES": types}


def _suffix_repeats(items: list[dict[str, Any]], key: str) -> list[dict[str, Any]]:
    """Suffix repeated values of ``key`` so every item stays addressable."""
    seen: dict[str, int] = {}
    for item in items:
        name = item[key]
        if name in seen:
            seen[name] += 1
            item[key] = f"{name}_{seen[name]}"
        else:
            seen[name] = 1
    return items


def _is_enum_initializer(value: Any) -> bool:  # noqa: ANN401
    # TypeScript enum members take string or numeric initializers only
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)


# Model runtime metadata


def _enum_options(schemas: Mapping[str, SchemaNode], prop: SchemaNode) -> list[str]:
    if isinstance(prop, ReferenceSchema):
        prop = resolve_schema(prop.ref, schemas)
    if isinstance(prop, AllOfSchema) and len(prop.parts) == 1:
        return _enum_options(schemas, prop.parts[0])
    if isinstance(prop, EnumSchema):
        return [to_ts_literal(value) for value in prop.values]
    return []


def build_property_metadata(
    schemas: Mapping[str, SchemaNode],
    name: str,
    prop: SchemaNode,
) -> dict[str, Any]:
    """Build the runtime metadata of one model property."""
    field_type = classify_field(schemas, prop)
    return {
        "PROPERTY_NAME": name,
        "PROPERTY_TYPE": field_type.value,
        "PROPERTY_OPTIONS": _enum_options(schemas, prop) if field_type is FieldType.ENUM else [],
        "PROPERTY_DESCRIPTION": prop.description,
        "PROPERTY_UNITS": prop.units,
        "PROPERTY_FORMAT": prop.format,
        "PROPERTY_DEFAULT": field_default(prop),
        "PROPERTY_MINIMUM": field_minimum(prop),
        "PROPERTY_MAXIMUM": field_maximum(prop),
    }


def build_model_runtime_context(document: ParsedDocument) -> dict[str, Any]:
    """Build the context of the runtime field metadata records.

    Args:
        document: The parsed document.

    Returns:
        The context with ``MODELS``.
    """
    partition = partition_schemas(document.schemas)
    return {
        "MODELS": [
            {
                "MODEL_NAME": pascalcase(name),
                "MODEL_DESCRIPTION": node.description,
                "MODEL_PROPERTIES": [
                    build_property_metadata(document.schemas, prop_name, prop)
                    for prop_name, prop, _ in _object_properties(node)
                ],
            }
            for name, node in partition.models.items()
        ]
    }
