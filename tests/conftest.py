"""Shared pytest fixtures for pren tests."""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pren.core.config import get_settings
from pren.core.types import DictPromptLookup, PromptRecord
from pren.storage import MemoryPromptStorage, FilePromptStorage
from pren.templates import Resolver


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Isolate tests from the host environment and the settings cache."""
    for var in ("PREN_MAX_DEPTH", "PREN_STORAGE_PATH", "PREN_LOG_LEVEL", "PREN_LOG_FORMAT"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# Sample prompts for testing
@pytest.fixture
def sample_prompts():
    """Prompts used throughout the composition tests."""
    return {
        "greeting": "Hello, {{name}}!",
        "farewell": "Goodbye, {{name}}!",
        "formal": "{{prompt:greeting}} Please enjoy your stay.",
        "dynamic": "Message: {{prompt_var:message_type}}",
    }


@pytest.fixture
def cyclic_prompts():
    """Prompts that reference each other in cycles."""
    return {
        "a": "{{prompt:b}}",
        "b": "{{prompt:a}}",
        "self": "{{prompt:self}}",
        "entry": "start {{prompt:a}}",
    }


@pytest.fixture
def lookup(sample_prompts):
    """In-memory lookup over the sample prompts."""
    return DictPromptLookup(sample_prompts)


@pytest.fixture
def resolver(lookup):
    """Resolver over the sample prompts."""
    return Resolver(lookup)


@pytest.fixture
def memory_storage(sample_prompts):
    """Memory storage pre-loaded with the sample prompts."""
    return MemoryPromptStorage([
        PromptRecord(name=name, content=content, tags=["sample"])
        for name, content in sample_prompts.items()
    ])


@pytest.fixture
def file_storage(tmp_path):
    """Empty file storage in a temporary directory."""
    return FilePromptStorage(str(tmp_path / "prompts"))
