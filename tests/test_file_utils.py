"""Tests for writing generated files."""

from pathlib import Path

from taggem.utils.file_utils import ensure_directory, get_relative_path, write_files_to_disk


class TestWriteFiles:
    """Test order-independent file writing."""

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        files = {
            tmp_path / "api" / "pets" / "index.ts": "pets",
            tmp_path / "api" / "apiModels.ts": "models",
        }
        assert write_files_to_disk(files) == sorted(files)
        assert (tmp_path / "api" / "pets" / "index.ts").read_text(encoding="utf-8") == "pets"
        assert (tmp_path / "api" / "apiModels.ts").read_text(encoding="utf-8") == "models"

    def test_existing_directories_are_reused(self, tmp_path: Path) -> None:
        ensure_directory(tmp_path / "api")
        ensure_directory(tmp_path / "api")
        write_files_to_disk({tmp_path / "api" / "index.ts": "x"})
        assert (tmp_path / "api" / "index.ts").exists()

    def test_relative_path(self, tmp_path: Path) -> None:
        assert get_relative_path(tmp_path / "api" / "index.ts", tmp_path) == Path("api/index.ts")
        assert get_relative_path(Path("/elsewhere/file.ts"), tmp_path) == Path("/elsewhere/file.ts")
