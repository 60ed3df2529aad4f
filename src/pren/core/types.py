"""Core type definitions for the prompt engine."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Dict, Any, List, Mapping, Protocol, runtime_checkable


@runtime_checkable
class PromptLookup(Protocol):
    """
    Resolves a prompt name to its stored template text.

    Implementations must be synchronous and read-only. Returning None
    means the prompt does not exist.
    """

    def resolve(self, name: str) -> Optional[str]:
        ...


class DictPromptLookup:
    """PromptLookup over a plain name -> template mapping."""

    def __init__(self, prompts: Optional[Mapping[str, str]] = None):
        self._prompts = dict(prompts or {})

    def resolve(self, name: str) -> Optional[str]:
        return self._prompts.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._prompts

    def __len__(self) -> int:
        return len(self._prompts)


@dataclass
class PromptRecord:
    """
    A stored prompt: template text plus its descriptive metadata.

    The name is the unique key within a storage backend.
    """
    name: str
    content: str
    description: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now().astimezone())

    def has_any_tag(self, tags: List[str]) -> bool:
        """Check whether this prompt carries at least one of the given tags."""
        return any(tag in tags for tag in self.tags)

    def metadata(self) -> Dict[str, Any]:
        """Frontmatter representation (everything except the content)."""
        return {
            "name": self.name,
            "description": self.description,
            "tags": list(self.tags),
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_metadata(cls, metadata: Dict[str, Any], content: str) -> "PromptRecord":
        """Create from frontmatter metadata and template content."""
        created_at = metadata.get("created_at")
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        elif not isinstance(created_at, datetime):
            created_at = datetime.now().astimezone()

        return cls(
            name=str(metadata["name"]),
            content=content,
            description=metadata.get("description"),
            tags=[str(t) for t in (metadata.get("tags") or [])],
            created_at=created_at,
        )
