"""
TypeScript Code Generator Module

This module builds template contexts from parsed OpenAPI documents and
renders them into TypeScript clients with Jinja2.
"""

from .context_builder import (
    build_model_runtime_context,
    build_model_types_context,
    build_service_contexts,
    partition_schemas,
)
from .template_engine import TypeScriptCodeGenerator, TypeScriptTemplateEngine
from .type_mapping import FieldType, classify_field, synthesize_default, translate_type

__all__ = [
    "FieldType",
    "TypeScriptCodeGenerator",
    "TypeScriptTemplateEngine",
    "build_model_runtime_context",
    "build_model_types_context",
    "build_service_contexts",
    "classify_field",
    "partition_schemas",
    "synthesize_default",
    "translate_type",
]
