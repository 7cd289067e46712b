#!/usr/bin/env python3
"""Command-line interface for taggem."""

import argparse
import contextlib
import shutil
import sys
import tempfile
import traceback
from collections.abc import Generator
from pathlib import Path

import requests

from taggem.generator.template_engine import API_DIRECTORY, TypeScriptCodeGenerator, TypeScriptTemplateEngine
from taggem.parser.loader import DocumentLoadError, is_remote
from taggem.parser.oas_parser import OASParser, ParsedDocument
from taggem.utils.file_utils import ensure_directory, get_relative_path, write_files_to_disk

# Exit codes for better error reporting
EXIT_SUCCESS = 0
EXIT_SOURCE_NOT_FOUND = 1
EXIT_INVALID_DOCUMENT = 2
EXIT_GENERATION_ERROR = 3


def parse_command_line_args(args: list[str] | None = None) -> argparse.Namespace:
    """Create and configure the command line argument parser."""
    parser = argparse.ArgumentParser(
        prog="taggem",
        description="Generate a TypeScript client from an OpenAPI/Swagger document",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s petstore.yaml ./client
  %(prog)s -s -n pets https://example.com/openapi.json ./client
  %(prog)s -m -v 1 petstore.yaml ./client --verbose
        """,
    )
    parser.add_argument(
        "source",
        help="Path or URL of the OpenAPI/Swagger document (YAML or JSON)",
        metavar="SOURCE",
    )
    parser.add_argument(
        "output_dir",
        type=Path,
        help="Output directory; files are generated in its api/ directory",
        metavar="OUTPUT_DIR",
    )
    parser.add_argument(
        "--monolith",
        "-m",
        action="store_true",
        help="Treat as a monolithic API and split directories by tag (the default)",
    )
    parser.add_argument(
        "--service",
        "-s",
        action="store_true",
        help="Treat as a microservice API and put every function in a single directory",
    )
    parser.add_argument(
        "--name",
        "-n",
        help="Name of the service directory in single-service mode",
        dest="service_name",
    )
    parser.add_argument(
        "--axios-version",
        "-v",
        type=int,
        default=0,
        help="Major Axios version to support; header types changed in 1.0 (default: %(default)s)",
        dest="axios_version",
    )
    parser.add_argument(
        "--template-dir",
        "-t",
        type=Path,
        help="Custom template directory (optional)",
        dest="template_dir",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    parsed_args = parser.parse_args(args)

    # Validate local source exists
    if not is_remote(parsed_args.source) and not Path(parsed_args.source).exists():
        parser.error(f"Document not found: {parsed_args.source}")

    return parsed_args


def print_verbose_info(*, operation_count: int, schema_count: int) -> None:
    """Print verbose information about the parsed document."""
    print(f"Parsed {operation_count} operations")
    print(f"Found {schema_count} schemas")


def print_generation_summary(*, written: list[Path], output_dir: Path) -> None:
    """List the written files relative to the output directory."""
    print(f"Generated {len(written)} files:")
    for file_path in written:
        print(f"  {get_relative_path(file_path, output_dir)}")
    print(f"\nTypeScript client generated successfully in {output_dir}")


@contextlib.contextmanager
def replace_api_directory(output_dir: Path) -> Generator[Path, None, None]:
    """Swap in an empty api directory, putting the previous one back if generation fails."""
    api_dir = output_dir / API_DIRECTORY
    with tempfile.TemporaryDirectory(prefix="taggem-") as scratch:
        previous = Path(scratch) / API_DIRECTORY
        if api_dir.exists():
            shutil.move(api_dir, previous)
        ensure_directory(api_dir)

        try:
            yield api_dir
        except Exception:
            shutil.rmtree(api_dir, ignore_errors=True)
            if previous.exists():
                print("Error: Generation failed. Restoring the previous api directory.", file=sys.stderr)
                shutil.move(previous, api_dir)
            raise


def parse_source(*, source: str, verbose: bool) -> ParsedDocument:
    """Load and parse the OpenAPI document at ``source``."""
    parser = OASParser()
    document = parser.parse_file(source)

    if verbose:
        print_verbose_info(
            operation_count=len(document.operations),
            schema_count=len(document.schemas),
        )

    return document


def generate_client_files(
    *,
    document: ParsedDocument,
    output_dir: Path,
    is_monolith: bool,
    service_name: str | None,
    axios_version: int,
    template_dir: Path | None = None,
) -> dict[Path, str]:
    """Generate the TypeScript client files for a parsed document."""
    generator = TypeScriptCodeGenerator(TypeScriptTemplateEngine(template_dir))
    return generator.generate_client(
        document,
        output_dir,
        is_monolith=is_monolith,
        service_name=service_name,
        axios_version=axios_version,
    )


def main(args: list[str] | None = None) -> int:
    """Generate a TypeScript client from an OpenAPI document."""
    parsed_args = parse_command_line_args(args)
    is_monolith = parsed_args.monolith or not parsed_args.service

    try:
        # The output directory stays untouched until the document parses
        document = parse_source(source=parsed_args.source, verbose=parsed_args.verbose)

        with replace_api_directory(parsed_args.output_dir):
            generated_files = generate_client_files(
                document=document,
                output_dir=parsed_args.output_dir,
                is_monolith=is_monolith,
                service_name=parsed_args.service_name,
                axios_version=parsed_args.axios_version,
                template_dir=parsed_args.template_dir,
            )

            written = write_files_to_disk(generated_files)

            if parsed_args.verbose:
                print_generation_summary(
                    written=written,
                    output_dir=parsed_args.output_dir,
                )
            else:
                print(f"TypeScript client generated successfully in {parsed_args.output_dir}")

        return EXIT_SUCCESS

    except FileNotFoundError:
        print(f"Error: Document not found: {parsed_args.source}", file=sys.stderr)
        return EXIT_SOURCE_NOT_FOUND
    except requests.RequestException as e:
        print(f"Error: Could not fetch {parsed_args.source}: {e}", file=sys.stderr)
        return EXIT_SOURCE_NOT_FOUND
    except DocumentLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID_DOCUMENT
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if parsed_args.verbose:
            traceback.print_exc()
        return EXIT_GENERATION_ERROR


if __name__ == "__main__":
    sys.exit(main())
