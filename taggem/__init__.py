"""
taggem: TypeScript client generator for OpenAPI documents

A Jinja2-based generator that turns an OpenAPI/Swagger document into Axios
request functions grouped by tag or service, model type declarations, enum
and union declarations, and runtime field metadata records.
"""

from .generator import TypeScriptCodeGenerator, TypeScriptTemplateEngine
from .parser import OASParser, ParsedDocument

__version__ = "1.0.0"

__all__ = [
    "OASParser",
    "ParsedDocument",
    "TypeScriptCodeGenerator",
    "TypeScriptTemplateEngine",
]
