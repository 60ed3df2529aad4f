"""In-memory prompt storage for testing and embedding."""

from typing import Dict, List, Optional

from .base import PromptStorage
from ..core.exceptions import PromptExistsError, StorageError
from ..core.types import PromptRecord
from ..templates.classifier import parse_template


class MemoryPromptStorage(PromptStorage):
    """In-memory prompt storage."""

    def __init__(self, records: Optional[List[PromptRecord]] = None):
        self._storage: Dict[str, PromptRecord] = {}
        for record in records or []:
            self.save_prompt(record)

    def save_prompt(self, record: PromptRecord, overwrite: bool = False) -> None:
        parse_template(record.content)
        if record.name in self._storage and not overwrite:
            raise PromptExistsError(f"Prompt '{record.name}' already exists")
        self._storage[record.name] = record

    def get_prompt(self, name: str) -> Optional[PromptRecord]:
        return self._storage.get(name)

    def list_prompts(self) -> List[PromptRecord]:
        return sorted(self._storage.values(), key=lambda r: r.name)

    def delete_prompt(self, name: str) -> None:
        if name not in self._storage:
            raise StorageError(f"Prompt not found: {name}")
        del self._storage[name]
