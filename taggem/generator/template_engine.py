"""
TypeScript Template Engine for OpenAPI Client Generation

This module uses Jinja2 templates to render the contexts built from a
parsed OpenAPI document into TypeScript source files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Final

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from taggem.generator.context_builder import (
    build_model_runtime_context,
    build_model_types_context,
    build_service_contexts,
)
from taggem.generator.filters import FILTERS
from taggem.parser.oas_parser import ParsedDocument

# Directory, under the output directory, holding every generated file
API_DIRECTORY: Final = "api"

SERVICE_TEMPLATE: Final = "service.ts.j2"
MODEL_TYPES_TEMPLATE: Final = "apiModelTypes.ts.j2"
MODELS_TEMPLATE: Final = "apiModels.ts.j2"

SERVICE_FILE: Final = "index.ts"
MODEL_TYPES_FILE: Final = "apiModelTypes.ts"
MODELS_FILE: Final = "apiModels.ts"


class TypeScriptTemplateEngine:
    """Template engine for generating TypeScript code."""

    def __init__(self, template_dir: Path | None = None) -> None:
        """Initialize the template engine."""
        if template_dir is None:
            current_dir = Path(__file__).parent
            template_dir = current_dir.parent / "templates"

        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters.update(FILTERS)

    def render_template(self, template_name: str, context: dict[str, Any]) -> str:
        """Render a template with the given context."""
        template = self.env.get_template(template_name)
        return template.render(**context)


class TypeScriptCodeGenerator:
    """Main code generator for TypeScript clients."""

    def __init__(self, template_engine: TypeScriptTemplateEngine | None = None) -> None:
        """Initialize the code generator."""
        self.template_engine = template_engine or TypeScriptTemplateEngine()

    def generate_client(
        self,
        document: ParsedDocument,
        output_dir: Path,
        *,
        is_monolith: bool = True,
        service_name: str | None = None,
        axios_version: int = 0,
    ) -> dict[Path, str]:
        """Generate the complete TypeScript client for a parsed document.

        Nothing is written; the caller receives the file contents keyed by
        their destination path.

        Args:
            document: The parsed OpenAPI document.
            output_dir: Directory the ``api`` directory is generated in.
            is_monolith: Split services by tag instead of a single service.
            service_name: Name of the single service.
            axios_version: Major version of the Axios library targeted.

        Returns:
            Mapping of file paths to file contents.
        """
        api_dir = Path(output_dir) / API_DIRECTORY

        files: dict[Path, str] = {}
        files.update(
            self._generate_service_files(
                document,
                api_dir,
                is_monolith=is_monolith,
                service_name=service_name,
                axios_version=axios_version,
            )
        )
        files.update(self._generate_model_type_files(document, api_dir))
        files.update(self._generate_model_files(document, api_dir))
        return files

    def _generate_service_files(
        self,
        document: ParsedDocument,
        api_dir: Path,
        *,
        is_monolith: bool,
        service_name: str | None,
        axios_version: int,
    ) -> dict[Path, str]:
        """Generate one request-function file per service bucket."""
        contexts = build_service_contexts(
            document,
            is_monolith=is_monolith,
            service_name=service_name,
            axios_version=axios_version,
        )
        return {
            api_dir / directory / SERVICE_FILE: self.template_engine.render_template(SERVICE_TEMPLATE, context)
            for directory, context in contexts.items()
        }

    def _generate_model_type_files(self, document: ParsedDocument, api_dir: Path) -> dict[Path, str]:
        """Generate the model, enum and union declarations."""
        context = build_model_types_context(document)
        return {api_dir / MODEL_TYPES_FILE: self.template_engine.render_template(MODEL_TYPES_TEMPLATE, context)}

    def _generate_model_files(self, document: ParsedDocument, api_dir: Path) -> dict[Path, str]:
        """Generate the runtime field metadata records."""
        context = build_model_runtime_context(document)
        return {api_dir / MODELS_FILE: self.template_engine.render_template(MODELS_TEMPLATE, context)}
