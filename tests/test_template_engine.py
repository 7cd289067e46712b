"""Tests for TypeScript rendering of the generated client."""

from pathlib import Path

import pytest

from taggem.generator.filters import http_method, ts_doc_comment, ts_optional_string, ts_property_key
from taggem.generator.template_engine import TypeScriptCodeGenerator, TypeScriptTemplateEngine
from taggem.parser.oas_parser import ParsedDocument


@pytest.fixture
def generated(parsed_petstore: ParsedDocument, tmp_path: Path) -> dict[Path, str]:
    """Files generated for the Petstore document, keyed relative to the output directory."""
    files = TypeScriptCodeGenerator().generate_client(parsed_petstore, tmp_path)
    return {path.relative_to(tmp_path): content for path, content in files.items()}


class TestFilters:
    """Test the Jinja2 filters."""

    def test_doc_comment(self) -> None:
        assert ts_doc_comment("Returns a pet") == "/** Returns a pet */"
        assert ts_doc_comment("First\nSecond", 2) == "  /**\n   * First\n   * Second\n   */"
        assert ts_doc_comment("") == ""
        assert ts_doc_comment(None) == ""

    def test_doc_comment_cannot_be_closed_early(self) -> None:
        assert "*/ x" not in ts_doc_comment("a */ x")

    def test_optional_string(self) -> None:
        assert ts_optional_string(None) == "undefined"
        assert ts_optional_string("kg") == "'kg'"

    def test_property_key(self) -> None:
        assert ts_property_key("name") == "name"
        assert ts_property_key("content-type") == "'content-type'"

    def test_http_method(self) -> None:
        assert http_method("GET") == "get"


class TestGenerateClient:
    """Test the set of generated files and their content."""

    def test_file_layout(self, generated: dict[Path, str]) -> None:
        assert set(generated) == {
            Path("api/pets/index.ts"),
            Path("api/default/index.ts"),
            Path("api/apiModelTypes.ts"),
            Path("api/apiModels.ts"),
        }

    def test_single_service_layout(self, parsed_petstore: ParsedDocument, tmp_path: Path) -> None:
        files = TypeScriptCodeGenerator().generate_client(
            parsed_petstore, tmp_path, is_monolith=False, service_name="pet store"
        )
        assert tmp_path / "api" / "petStore" / "index.ts" in files

    def test_generation_is_deterministic(self, parsed_petstore: ParsedDocument, tmp_path: Path) -> None:
        generator = TypeScriptCodeGenerator()
        assert generator.generate_client(parsed_petstore, tmp_path) == generator.generate_client(
            parsed_petstore, tmp_path
        )

    def test_service_file(self, generated: dict[Path, str]) -> None:
        service = generated[Path("api/pets/index.ts")]
        assert 'import * as ApiModelTypes from "../apiModelTypes";' in service
        assert "AxiosRequestHeaders as RequestHeaders" in service
        assert "const BASE_PATH = 'https://api.example.com/v1';" in service
        assert "export interface GetPetsIdParams {" in service
        assert "  id: string;" in service
        assert "/** Find pet by id */" in service
        assert "export function getPetsId(" in service
        assert "): Promise<AxiosResponse<ApiModelTypes.Pet>> {" in service
        assert "url: `${BASE_PATH}/pets/${params.id}`," in service
        assert 'method: "delete",' in service

    def test_query_parameters_and_payload(self, generated: dict[Path, str]) -> None:
        service = generated[Path("api/pets/index.ts")]
        assert "  limit?: number;" in service
        assert "      limit: params.limit," in service
        assert "  data: ApiModelTypes.NewPet," in service
        assert "    data,\n" in service

    def test_axios_v1_headers(self, parsed_petstore: ParsedDocument, tmp_path: Path) -> None:
        files = TypeScriptCodeGenerator().generate_client(parsed_petstore, tmp_path, axios_version=1)
        assert "RawAxiosRequestHeaders as RequestHeaders" in files[tmp_path / "api" / "pets" / "index.ts"]

    def test_model_types_file(self, generated: dict[Path, str]) -> None:
        types = generated[Path("api/apiModelTypes.ts")]
        assert "/** A pet */\nexport interface Pet {" in types
        assert "  readonly id: number;" in types
        assert "  name: string;" in types
        assert "  status?: Status;" in types
        assert "  tags?: Array<string>;" in types
        assert "export interface NewPet {" in types
        assert "  owner?: string;" in types
        assert "export enum Status {\n  ACTIVE = 'active',\n  INACTIVE = 'inactive',\n}" in types
        assert "export type PetOrError = Pet | Error;" in types

    def test_model_runtime_file(self, generated: dict[Path, str]) -> None:
        models = generated[Path("api/apiModels.ts")]
        assert "export const Pet: Record<string, FieldMetadata> = {" in models
        assert "    type: FieldType.ENUM,\n    options: ['active', 'inactive']," in models
        assert "    units: 'kg'," in models
        assert "    default: 0.5,\n    minimum: 0.5,\n    maximum: undefined," in models


class TestTemplateEngine:
    """Test template loading."""

    def test_custom_template_directory(self, tmp_path: Path) -> None:
        (tmp_path / "hello.j2").write_text("{{ NAME | pascal_case }}", encoding="utf-8")
        engine = TypeScriptTemplateEngine(tmp_path)
        assert engine.render_template("hello.j2", {"NAME": "pet store"}) == "PetStore"

    def test_missing_variables_fail(self, tmp_path: Path) -> None:
        (tmp_path / "strict.j2").write_text("{{ MISSING }}", encoding="utf-8")
        engine = TypeScriptTemplateEngine(tmp_path)
        with pytest.raises(Exception, match="MISSING"):
            engine.render_template("strict.j2", {})
