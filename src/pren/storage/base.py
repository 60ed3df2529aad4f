"""Abstract prompt storage backend."""

from typing import List, Optional

from ..core.types import PromptRecord


class PromptStorage:
    """
    Abstract backend for prompt storage.

    Every backend is also a PromptLookup: resolve() returns the stored
    template text, so a storage can be handed straight to the engine.
    """

    def save_prompt(self, record: PromptRecord, overwrite: bool = False) -> None:
        raise NotImplementedError

    def get_prompt(self, name: str) -> Optional[PromptRecord]:
        raise NotImplementedError

    def list_prompts(self) -> List[PromptRecord]:
        raise NotImplementedError

    def delete_prompt(self, name: str) -> None:
        raise NotImplementedError

    def get_prompts_by_tag(self, tags: List[str]) -> List[PromptRecord]:
        """Get prompts carrying at least one of the given tags."""
        return [p for p in self.list_prompts() if p.has_any_tag(tags)]

    def exists(self, name: str) -> bool:
        return self.get_prompt(name) is not None

    def resolve(self, name: str) -> Optional[str]:
        record = self.get_prompt(name)
        return record.content if record is not None else None
