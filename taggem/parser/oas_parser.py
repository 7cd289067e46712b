"""
OpenAPI Specification Parser for TypeScript Client Generation.

This module parses OpenAPI 3.x (and Swagger 2) documents into operation
records and named schema nodes, the input of the context builders.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final

from taggem.parser.loader import DocumentLoadError, load_document, parse_document_text
from taggem.parser.resolver import SchemaReferenceError
from taggem.parser.schema import SchemaNode, parse_schema, parse_schemas
from taggem.utils.string_case import camelcase, is_js_identifier

# HTTP methods supported by OpenAPI, in the order a path item lists them
HTTP_METHODS: Final = frozenset({"get", "put", "post", "delete", "options", "head", "patch", "trace"})

# Content types considered for request and response bodies, most preferred first
CONTENT_TYPE_PREFERENCE: Final = (
    "application/json",
    "application/xml",
    "application/x-www-form-urlencoded",
    "text/plain",
)

# Bucket for operations without tags
DEFAULT_TAG: Final = "default"

# Bucket name in single-service mode when no service name is supplied
DEFAULT_SERVICE_NAME: Final = "service"

# Name of the object holding parameter values in generated functions
PARAMS_OBJECT: Final = "params"

_PLACEHOLDER_PATTERN: Final = re.compile(r"\{([^{}]+)\}")

# Keys describing a Swagger 2 parameter rather than its schema
_PARAMETER_KEYS: Final = frozenset({"name", "in", "required", "description", "schema"})


def generate_operation_id(method: str, path: str) -> str:
    """Synthesize an operation id from the method and path.

    Args:
        method: The HTTP method.
        path: The path template.

    Returns:
        The camelCase concatenation, e.g. ``getUsersId`` for ``get /users/{id}``.
    """
    return camelcase(f"{method}{path}")


def param_accessor(name: str) -> str:
    """Return the expression reading parameter ``name`` from the params object."""
    if is_js_identifier(name):
        return f"{PARAMS_OBJECT}.{name}"
    escaped = name.replace("\\", "\\\\").replace('"', '\\"')
    return f'{PARAMS_OBJECT}["{escaped}"]'


@dataclass
class Parameter:
    """Represents an OpenAPI parameter."""

    name: str
    location: str
    required: bool
    schema: SchemaNode
    description: str | None = None

    @property
    def is_path(self) -> bool:
        return self.location.lower() == "path"

    @property
    def is_query(self) -> bool:
        return self.location.lower() == "query"


def interpolate_path(path: str, parameters: list[Parameter]) -> str:
    """Rewrite ``{name}`` placeholders into template-literal interpolations.

    Only placeholders matching a declared parameter are rewritten, whatever
    the parameter's location.

    Args:
        path: The path template, e.g. ``/pets/{id}``.
        parameters: The declared parameters of the operation.

    Returns:
        The interpolated path, e.g. ``/pets/${params.id}``.
    """
    declared = {param.name for param in parameters}

    def replace_placeholder(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in declared:
            return match.group(0)
        return "${" + param_accessor(name) + "}"

    return _PLACEHOLDER_PATTERN.sub(replace_placeholder, path)


@dataclass
class Operation:
    """Represents one HTTP method bound to one path."""

    path: str
    method: str
    operation_id: str | None
    summary: str | None
    description: str | None
    parameters: list[Parameter]
    request_body: SchemaNode | None
    response: SchemaNode | None
    tags: list[str]
    has_request_body: bool = False
    function_name: str = field(init=False)

    def __post_init__(self) -> None:
        self.function_name = self.operation_id or generate_operation_id(self.method, self.path)

    @property
    def tag(self) -> str:
        return self.tags[0] if self.tags else DEFAULT_TAG

    @property
    def path_parameters(self) -> list[Parameter]:
        return [p for p in self.parameters if p.is_path]

    @property
    def query_parameters(self) -> list[Parameter]:
        return [p for p in self.parameters if p.is_query]

    @property
    def interpolated_path(self) -> str:
        return interpolate_path(self.path, self.parameters)


@dataclass
class ParsedDocument:
    """Represents a parsed OpenAPI document."""

    info: dict[str, Any]
    base_path: str
    operations: list[Operation]
    schemas: dict[str, SchemaNode]


def group_operations(
    operations: list[Operation],
    *,
    is_monolith: bool = True,
    service_name: str | None = None,
) -> dict[str, list[Operation]]:
    """Bucket operations for service generation.

    Args:
        operations: Operations in document order.
        is_monolith: Bucket by first tag when true, otherwise put every
            operation in a single bucket.
        service_name: Bucket name in single-service mode.

    Returns:
        Buckets in first-seen order, each keeping document order.
    """
    groups: dict[str, list[Operation]] = {}
    for operation in operations:
        bucket = operation.tag if is_monolith else (service_name or DEFAULT_SERVICE_NAME)
        groups.setdefault(bucket, []).append(operation)
    return groups


def resolve_pointer(document: dict[str, Any], ref: str) -> dict[str, Any]:
    """Resolve a local JSON pointer such as ``#/components/parameters/Limit``.

    Raises:
        SchemaReferenceError: If the pointer does not lead to a mapping.
    """
    node: Any = document
    for part in ref.lstrip("#").strip("/").split("/"):
        part = part.replace("~1", "/").replace("~0", "~")
        if not isinstance(node, dict) or part not in node:
            msg = f"Reference {ref!r} does not resolve within the document"
            raise SchemaReferenceError(msg)
        node = node[part]
    if not isinstance(node, dict):
        msg = f"Reference {ref!r} does not point to an object"
        raise SchemaReferenceError(msg)
    return node


def select_content_schema(body: dict[str, Any] | None) -> SchemaNode | None:
    """Pick the schema of a request or response body.

    The first content type present in ``CONTENT_TYPE_PREFERENCE`` wins.
    Swagger 2 bodies carry their schema directly.

    Args:
        body: A request body or response object.

    Returns:
        The parsed schema, or None when no usable content is declared.
    """
    if not body:
        return None

    if "schema" in body:
        return parse_schema(body["schema"])

    content = body.get("content") or {}
    for content_type in CONTENT_TYPE_PREFERENCE:
        if content_type in content:
            media = content[content_type] or {}
            return parse_schema(media["schema"]) if "schema" in media else None
    return None


def extract_operations(document: dict[str, Any]) -> list[Operation]:
    """Flatten ``paths`` into one operation per (path, method) pair.

    Args:
        document: The raw document tree.

    Returns:
        Operations in document order.
    """
    operations: list[Operation] = []

    for path, path_item in (document.get("paths") or {}).items():
        if not isinstance(path_item, dict):
            continue
        shared_parameters = path_item.get("parameters") or []

        for method, operation_data in path_item.items():
            if method.lower() not in HTTP_METHODS or not isinstance(operation_data, dict):
                continue
            operations.append(_parse_operation(document, str(path), method.lower(), operation_data, shared_parameters))

    return operations


def _parse_operation(
    document: dict[str, Any],
    path: str,
    method: str,
    operation_data: dict[str, Any],
    shared_parameters: list[Any],
) -> Operation:
    """Parse a single operation."""
    raw_parameters = _merge_parameters(
        [_dereference(document, p) for p in shared_parameters],
        [_dereference(document, p) for p in operation_data.get("parameters") or []],
    )

    body_parameter = next((p for p in raw_parameters if str(p.get("in", "")).lower() == "body"), None)
    parameters = [_parse_parameter(p) for p in raw_parameters if p is not body_parameter and p.get("name")]

    request_body_data = operation_data.get("requestBody")
    if request_body_data is not None:
        request_body_data = _dereference(document, request_body_data)
    elif body_parameter is not None:
        request_body_data = body_parameter

    return Operation(
        path=path,
        method=method,
        operation_id=operation_data.get("operationId"),
        summary=operation_data.get("summary"),
        description=operation_data.get("description"),
        parameters=parameters,
        request_body=select_content_schema(request_body_data),
        response=select_content_schema(_success_response(document, operation_data)),
        tags=[str(tag) for tag in operation_data.get("tags") or []],
        has_request_body=request_body_data is not None,
    )


def _dereference(document: dict[str, Any], data: Any) -> dict[str, Any]:  # noqa: ANN401
    if isinstance(data, dict) and "$ref" in data:
        return resolve_pointer(document, data["$ref"])
    return data if isinstance(data, dict) else {}


def _merge_parameters(shared: list[dict[str, Any]], own: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Combine path-item and operation parameters; the operation's win on name and location."""
    own_keys = {(p.get("name"), str(p.get("in", "")).lower()) for p in own}
    inherited = [p for p in shared if (p.get("name"), str(p.get("in", "")).lower()) not in own_keys]
    return inherited + own


def _parse_parameter(param_data: dict[str, Any]) -> Parameter:
    """Parse a parameter."""
    if "schema" in param_data:
        schema = parse_schema(param_data["schema"])
    else:
        # Swagger 2 declares the type on the parameter itself
        schema = parse_schema({k: v for k, v in param_data.items() if k not in _PARAMETER_KEYS})

    return Parameter(
        name=str(param_data["name"]),
        location=str(param_data.get("in", "query")),
        required=bool(param_data.get("required", False)),
        schema=schema,
        description=param_data.get("description"),
    )


def _success_response(document: dict[str, Any], operation_data: dict[str, Any]) -> dict[str, Any] | None:
    """Return the response object describing success: first 2xx, else ``default``."""
    responses = operation_data.get("responses") or {}
    for status_code, response in responses.items():
        if str(status_code).startswith("2"):
            return _dereference(document, response)
    if "default" in responses:
        return _dereference(document, responses["default"])
    return None


def _parse_base_path(document: dict[str, Any]) -> str:
    if document.get("basePath"):
        return str(document["basePath"])
    servers = document.get("servers") or []
    if servers and isinstance(servers[0], dict) and servers[0].get("url"):
        return str(servers[0]["url"])
    return ""


class OASParser:
    """Parser for OpenAPI 3.x and Swagger 2 documents."""

    def __init__(self) -> None:
        self.document: dict[str, Any] | None = None

    def parse_file(self, location: str | Path) -> ParsedDocument:
        """Parse a document from a path or URL."""
        self.document = load_document(location)
        return self._parse_document()

    def parse_text(self, text: str) -> ParsedDocument:
        """Parse a document from YAML or JSON text."""
        self.document = parse_document_text(text)
        return self._parse_document()

    def parse_dict(self, document: dict[str, Any]) -> ParsedDocument:
        """Parse a document from an already loaded tree."""
        self.document = document
        return self._parse_document()

    def _parse_document(self) -> ParsedDocument:
        """Parse the loaded document."""
        if not self.document:
            msg = "No document loaded"
            raise DocumentLoadError(msg)

        components = self.document.get("components") or {}
        raw_schemas = components.get("schemas") or self.document.get("definitions") or {}

        return ParsedDocument(
            info=self.document.get("info") or {},
            base_path=_parse_base_path(self.document),
            operations=extract_operations(self.document),
            schemas=parse_schemas(raw_schemas),
        )
