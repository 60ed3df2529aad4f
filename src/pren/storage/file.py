"""
File-based prompt storage.

Each prompt is one markdown file, <name>.md, under the base directory:

    ---
    name: greeting
    description: Friendly opener
    tags:
    - example
    created_at: '2026-10-19T09:30:00+00:00'
    ---
    Hello, {{name}}!
"""

import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from .base import PromptStorage
from ..core.exceptions import PromptExistsError, StorageError
from ..core.types import PromptRecord
from ..templates.classifier import parse_template

logger = logging.getLogger(__name__)

FRONTMATTER_PATTERN = re.compile(r"^---\s*\n(.*?)\n---\s*\n", re.DOTALL)


def parse_frontmatter(content: str) -> Tuple[Dict[str, Any], str]:
    """
    Split YAML frontmatter from a prompt file.

    Args:
        content: Raw file content

    Returns:
        Tuple of (frontmatter dict, body content)

    Raises:
        StorageError: If the frontmatter is not valid YAML
    """
    match = FRONTMATTER_PATTERN.match(content)
    if not match:
        return {}, content

    try:
        frontmatter = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as e:
        raise StorageError(f"Failed to parse frontmatter: {e}", cause=e) from e

    if not isinstance(frontmatter, dict):
        raise StorageError("Frontmatter must be a mapping")
    return frontmatter, content[match.end():]


def serialize_frontmatter(metadata: Dict[str, Any], body: str) -> str:
    """Render metadata and body back into prompt file content."""
    header = yaml.safe_dump(metadata, sort_keys=False, allow_unicode=True)
    return f"---\n{header}---\n{body}"


class FilePromptStorage(PromptStorage):
    """Stores prompts as markdown files with YAML frontmatter."""

    def __init__(self, base_path: str):
        self.base_path = Path(base_path).expanduser()

    def _ensure_base_directory(self) -> None:
        if not self.base_path.exists():
            self.base_path.mkdir(parents=True, exist_ok=True)
        elif not self.base_path.is_dir():
            raise StorageError("Invalid base path", path=str(self.base_path))

    @staticmethod
    def _is_valid_name(name: str) -> bool:
        return bool(name) and "/" not in name and "\\" not in name and not name.startswith(".")

    def _get_path(self, name: str) -> Path:
        """Get file path for a prompt."""
        if not self._is_valid_name(name):
            raise StorageError(f"Invalid prompt name: {name!r}")
        return self.base_path / f"{name}.md"

    def _read(self, path: Path) -> PromptRecord:
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to read prompt: {e}", path=str(path), cause=e) from e

        metadata, body = parse_frontmatter(raw)
        metadata.setdefault("name", path.stem)
        return PromptRecord.from_metadata(metadata, body.lstrip())

    def save_prompt(self, record: PromptRecord, overwrite: bool = False) -> None:
        """
        Save a prompt, creating the base directory if needed.

        Raises:
            TemplateSyntaxError: If the content is not a valid template
            PromptExistsError: If the prompt exists and overwrite is False
            StorageError: If the base path is not a directory or the write fails
        """
        parse_template(record.content)
        self._ensure_base_directory()

        path = self._get_path(record.name)
        if path.exists() and not overwrite:
            raise PromptExistsError(f"Prompt '{record.name}' already exists", path=str(path))

        try:
            path.write_text(serialize_frontmatter(record.metadata(), record.content), encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to write prompt: {e}", path=str(path), cause=e) from e
        logger.debug(f"Saved prompt '{record.name}' to {path}")

    def get_prompt(self, name: str) -> Optional[PromptRecord]:
        path = self._get_path(name)
        if not path.is_file():
            return None
        return self._read(path)

    def resolve(self, name: str) -> Optional[str]:
        # Names selected at render time may not be storable; no file can match them
        if not self._is_valid_name(name):
            return None
        return super().resolve(name)

    def list_prompts(self) -> List[PromptRecord]:
        """List the prompts stored directly in the base directory."""
        if not self.base_path.is_dir():
            return []
        return [
            self._read(p) for p in sorted(self.base_path.glob("*.md"))
            if p.is_file() and self._is_valid_name(p.stem)
        ]

    def delete_prompt(self, name: str) -> None:
        path = self._get_path(name)
        if not path.is_file():
            raise StorageError(f"Prompt not found: {name}", path=str(path))

        try:
            path.unlink()
        except OSError as e:
            raise StorageError(f"Failed to delete prompt: {e}", path=str(path), cause=e) from e
        logger.debug(f"Deleted prompt '{name}'")
