"""
String case conversion utilities for TypeScript client generation.

This module provides the case conversions used for generated identifiers:
PascalCase for type and model names, camelCase for function and directory
names. Words are split the way lodash does it, so any run of characters
that is not a letter or digit acts as a separator and case transitions
start a new word.
"""

import re
from collections.abc import Callable
from typing import Final

# Regex patterns for case conversion
_WORD_PATTERN: Final = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+\d*|[A-Z]+\d*|\d+")
_JS_IDENTIFIER_PATTERN: Final = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

# Reserved words that cannot be used as bare identifiers in generated TypeScript
TS_RESERVED_WORDS: Final = frozenset(
    {
        "break",
        "case",
        "catch",
        "class",
        "const",
        "continue",
        "debugger",
        "default",
        "delete",
        "do",
        "else",
        "enum",
        "export",
        "extends",
        "false",
        "finally",
        "for",
        "function",
        "if",
        "import",
        "in",
        "instanceof",
        "new",
        "null",
        "return",
        "super",
        "switch",
        "this",
        "throw",
        "true",
        "try",
        "typeof",
        "var",
        "void",
        "while",
        "with",
    }
)


def _convert_if_not_empty(string: str | None, conversion_func: Callable[[str], str]) -> str:
    """Safely convert a string, returning empty string if input is None or empty."""
    return conversion_func(string) if string else ""


def words(string: str | None) -> list[str]:
    """Split a string into its words.

    Args:
        string: String to split.

    Returns:
        The words of the string, in order.

    Examples:
        >>> words("get/users/{id}")
        ['get', 'users', 'id']
        >>> words("getHTTPResponse")
        ['get', 'HTTP', 'Response']
    """
    return _WORD_PATTERN.findall(string) if string else []


def camelcase(string: str | None) -> str:
    """Convert string into camelCase.

    Args:
        string: String to convert.

    Returns:
        Camel case string.

    Examples:
        >>> camelcase("get/users/{id}")
        'getUsersId'
        >>> camelcase("pet-store")
        'petStore'
        >>> camelcase("getHTTPResponse")
        'getHttpResponse'
    """

    def _camelcase(s: str) -> str:
        parts = words(s)
        if not parts:
            return ""
        return parts[0].lower() + "".join(word.capitalize() for word in parts[1:])

    return _convert_if_not_empty(string, _camelcase)


def pascalcase(string: str | None) -> str:
    """Convert string into PascalCase.

    Args:
        string: String to convert.

    Returns:
        PascalCase string.

    Examples:
        >>> pascalcase("pet_store")
        'PetStore'
        >>> pascalcase("api-model-types")
        'ApiModelTypes'
    """

    def _pascalcase(s: str) -> str:
        return "".join(word.capitalize() for word in words(s))

    return _convert_if_not_empty(string, _pascalcase)


def snakecase(string: str | None) -> str:
    """Convert string into snake_case.

    Args:
        string: String to convert.

    Returns:
        Snake case string.

    Examples:
        >>> snakecase("HelloWorld")
        'hello_world'
    """
    return "_".join(word.lower() for word in words(string))


def constcase(string: str | None) -> str:
    """Convert string into CONSTANT_CASE (upper snake case).

    Args:
        string: String to convert.

    Returns:
        Constant case string.

    Examples:
        >>> constcase("inProgress")
        'IN_PROGRESS'
    """
    return snakecase(string).upper()


def is_js_identifier(name: str) -> bool:
    """Check if a name can be used as a bare JavaScript property identifier.

    Args:
        name: The name to check.

    Returns:
        True if ``name`` is a syntactically valid identifier.
    """
    return bool(_JS_IDENTIFIER_PATTERN.match(name))


def normalize_ts_identifier(name: str | None) -> str:
    """Normalize name to be usable as a TypeScript identifier.

    Args:
        name: The string to normalize.

    Returns:
        A valid identifier, prefixed with an underscore when it would
        start with a digit or collide with a reserved word.

    Examples:
        >>> normalize_ts_identifier("123invalid")
        '_123invalid'
        >>> normalize_ts_identifier("delete")
        '_delete'
    """

    def _normalize(s: str) -> str:
        normalized = re.sub(r"[^A-Za-z0-9_$]", "_", s)
        if normalized[0].isdigit() or normalized in TS_RESERVED_WORDS:
            normalized = f"_{normalized}"
        return normalized

    return _convert_if_not_empty(name, _normalize)
