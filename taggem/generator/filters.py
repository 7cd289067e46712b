"""
Jinja2 filters for TypeScript code generation.

This module provides custom Jinja2 filters used by the service, model type
and model runtime templates.
"""

from __future__ import annotations

from typing import Final

from taggem.generator.type_mapping import UNDEFINED_LITERAL, ts_string_literal
from taggem.parser.oas_parser import param_accessor
from taggem.utils.string_case import camelcase, is_js_identifier, pascalcase

# JSDoc patterns
_DOC_OPEN: Final = "/**"
_DOC_LINE_PREFIX: Final = " * "
_DOC_CLOSE: Final = " */"


def ts_doc_comment(text: str | None, indent: int = 0) -> str:
    """Convert text to a JSDoc comment block.

    Single-line text produces a one-line block; multi-line text keeps its
    line structure. ``*/`` inside the text is escaped so it cannot close the
    comment early.

    Args:
        text: The text to convert.
        indent: Number of spaces for base indentation.

    Returns:
        The comment block, or an empty string when there is no text.

    Example:
        >>> ts_doc_comment("Returns a pet")
        '/** Returns a pet */'
        >>> ts_doc_comment("First\\nSecond")
        '/**\\n * First\\n * Second\\n */'
    """
    if not text or not text.strip():
        return ""

    indent_str = " " * indent
    lines = [line.rstrip().replace("*/", "*\\/") for line in text.strip().split("\n")]

    if len(lines) == 1:
        return f"{indent_str}{_DOC_OPEN} {lines[0]} */"

    body = [f"{indent_str}{_DOC_LINE_PREFIX}{line}".rstrip() for line in lines]
    return "\n".join([f"{indent_str}{_DOC_OPEN}", *body, f"{indent_str}{_DOC_CLOSE}"])


def ts_optional_string(text: str | None) -> str:
    """Format optional text as a string literal, or ``undefined`` when absent."""
    if text is None:
        return UNDEFINED_LITERAL
    return ts_string_literal(str(text))


def ts_property_key(name: str) -> str:
    """Format a property name as an object key, quoting it when needed.

    Example:
        >>> ts_property_key("name")
        'name'
        >>> ts_property_key("content-type")
        "'content-type'"
    """
    return name if is_js_identifier(name) else ts_string_literal(name)


def http_method(method: str) -> str:
    """Format an HTTP method as Axios expects it (lowercase)."""
    return method.lower()


# Register filters that will be available in Jinja templates
FILTERS = {
    "camel_case": camelcase,
    "pascal_case": pascalcase,
    "ts_doc_comment": ts_doc_comment,
    "ts_string_literal": ts_string_literal,
    "ts_optional_string": ts_optional_string,
    "ts_property_key": ts_property_key,
    "http_method": http_method,
    "param_accessor": param_accessor,
}
