"""
Writing of generated TypeScript files.

Directories are created on demand and creation never fails on an existing
directory, so files may be written in any order.
"""

from pathlib import Path


def ensure_directory(directory: Path) -> Path:
    """Create ``directory`` and its parents unless they already exist."""
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def write_files_to_disk(files: dict[Path, str]) -> list[Path]:
    """Write each generated file, creating its directory first.

    Args:
        files: Generated file contents keyed by destination path.

    Returns:
        The written paths, sorted.
    """
    for path, content in files.items():
        ensure_directory(path.parent).joinpath(path.name).write_text(content, encoding="utf-8")
    return sorted(files)


def get_relative_path(file_path: Path, base_path: Path) -> Path:
    """Express ``file_path`` relative to ``base_path`` for display.

    Paths outside ``base_path`` are returned unchanged.
    """
    if file_path.is_relative_to(base_path):
        return file_path.relative_to(base_path)
    return file_path
