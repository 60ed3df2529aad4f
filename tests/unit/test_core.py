"""Tests for core module - types, exceptions, configuration and logging."""

import logging
import pytest
from datetime import datetime
from pren.core.types import DictPromptLookup, PromptLookup, PromptRecord
from pren.core.config import Settings, get_settings, reload_settings
from pren.core.log import configure_logging
from pren.core.exceptions import (
    PrenError,
    RenderError,
    TemplateSyntaxError,
    UnterminatedPlaceholderError,
    MalformedPlaceholderError,
    EmptyReferenceNameError,
    UndefinedVariableError,
    PromptNotFoundError,
    CyclicReferenceError,
    RecursionLimitExceededError,
    StorageError,
    PromptExistsError,
    ConfigurationError,
)


class TestPromptRecord:
    """Tests for PromptRecord dataclass."""

    def test_create_record(self):
        """Test creating a record with defaults."""
        record = PromptRecord(name="greeting", content="Hello")
        assert record.name == "greeting"
        assert record.description is None
        assert record.tags == []
        assert isinstance(record.created_at, datetime)

    def test_has_any_tag(self):
        """Test tag matching."""
        record = PromptRecord(name="p", content="x", tags=["a", "b"])
        assert record.has_any_tag(["b", "z"])
        assert not record.has_any_tag(["z"])
        assert not record.has_any_tag([])

    def test_metadata(self):
        """Test metadata excludes content."""
        record = PromptRecord(name="p", content="x", description="d", tags=["t"])
        metadata = record.metadata()
        assert metadata["name"] == "p"
        assert metadata["description"] == "d"
        assert metadata["tags"] == ["t"]
        assert "content" not in metadata

    def test_from_metadata(self):
        """Test building a record from frontmatter."""
        record = PromptRecord.from_metadata(
            {"name": "p", "tags": ["t"], "created_at": "2026-01-02T03:04:05+00:00"},
            "body"
        )
        assert record.content == "body"
        assert record.created_at.year == 2026
        assert record.description is None

    def test_from_metadata_missing_optional_fields(self):
        """Test that absent or null fields get defaults."""
        record = PromptRecord.from_metadata({"name": "p", "tags": None}, "body")
        assert record.tags == []
        assert isinstance(record.created_at, datetime)


class TestDictPromptLookup:
    """Tests for DictPromptLookup."""

    def test_resolve(self):
        """Test resolving known and unknown names."""
        lookup = DictPromptLookup({"a": "A"})
        assert lookup.resolve("a") == "A"
        assert lookup.resolve("b") is None

    def test_is_prompt_lookup(self):
        """Test protocol conformance."""
        assert isinstance(DictPromptLookup(), PromptLookup)

    def test_copies_input(self):
        """Test that later changes to the source dict are not seen."""
        prompts = {"a": "A"}
        lookup = DictPromptLookup(prompts)
        prompts["a"] = "changed"
        assert lookup.resolve("a") == "A"
        assert "a" in lookup
        assert len(lookup) == 1


class TestExceptions:
    """Tests for custom exceptions."""

    def test_base_exception(self):
        """Test PrenError base exception."""
        error = PrenError("Test error", details={"key": "value"})
        assert error.message == "Test error"
        assert error.details["key"] == "value"
        assert "Details" in str(error)

    def test_exception_without_details(self):
        """Test string form without details."""
        assert str(PrenError("plain")) == "plain"

    def test_render_error_taxonomy(self):
        """Test that every render failure is a RenderError."""
        for cls in (
            UnterminatedPlaceholderError,
            MalformedPlaceholderError,
            EmptyReferenceNameError,
            UndefinedVariableError,
            PromptNotFoundError,
            CyclicReferenceError,
            RecursionLimitExceededError,
        ):
            assert issubclass(cls, RenderError)
            assert issubclass(cls, PrenError)

    def test_syntax_error_position(self):
        """Test position is recorded in details."""
        error = MalformedPlaceholderError("bad", position=4)
        assert error.position == 4
        assert error.details["position"] == 4
        assert isinstance(error, TemplateSyntaxError)

    def test_undefined_variable(self):
        """Test UndefinedVariableError."""
        error = UndefinedVariableError("name")
        assert error.name == "name"
        assert str(error) == "Missing argument: name"

    def test_prompt_not_found(self):
        """Test PromptNotFoundError."""
        error = PromptNotFoundError("greeting")
        assert error.name == "greeting"
        assert "greeting" in str(error)

    def test_cyclic_reference(self):
        """Test CyclicReferenceError keeps the path."""
        error = CyclicReferenceError(["a", "b", "a"])
        assert error.path == ["a", "b", "a"]
        assert "a -> b -> a" in str(error)

    def test_recursion_limit(self):
        """Test RecursionLimitExceededError."""
        error = RecursionLimitExceededError(3, ["p0", "p1", "p2", "p3"])
        assert error.limit == 3
        assert error.details["path"] == ["p0", "p1", "p2", "p3"]

    def test_storage_errors(self):
        """Test storage error hierarchy."""
        error = PromptExistsError("exists", path="/tmp/p.md")
        assert isinstance(error, StorageError)
        assert error.details["path"] == "/tmp/p.md"
        assert not isinstance(error, RenderError)

    def test_configuration_error(self):
        """Test ConfigurationError."""
        error = ConfigurationError("bad", config_key="PREN_MAX_DEPTH")
        assert error.config_key == "PREN_MAX_DEPTH"

    def test_exception_with_cause(self):
        """Test exception with cause."""
        cause = ValueError("Original error")
        error = StorageError("Wrapped error", cause=cause)
        assert error.cause is cause


class TestSettings:
    """Tests for configuration."""

    def test_defaults(self):
        """Test default settings."""
        settings = Settings()
        assert settings.engine.max_depth == 10
        assert settings.logging.level == "WARNING"
        assert settings.logging.format == "rich"
        assert settings.storage.base_path.endswith("prompts")

    def test_environment_overrides(self, monkeypatch, tmp_path):
        """Test reading settings from the environment."""
        monkeypatch.setenv("PREN_MAX_DEPTH", "4")
        monkeypatch.setenv("PREN_STORAGE_PATH", str(tmp_path))
        settings = reload_settings()
        assert settings.engine.max_depth == 4
        assert settings.storage.base_path == str(tmp_path)

    def test_get_settings_cached(self):
        """Test that settings are cached."""
        assert get_settings() is get_settings()


class TestLogging:
    """Tests for logging configuration."""

    def test_configure_plain(self, monkeypatch):
        """Test plain handler setup."""
        monkeypatch.setenv("PREN_LOG_FORMAT", "plain")
        monkeypatch.setenv("PREN_LOG_LEVEL", "debug")
        logger = configure_logging(reload_settings().logging)
        assert logger.name == "pren"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert type(logger.handlers[0]) is logging.StreamHandler

    def test_configure_rich_replaces_handlers(self):
        """Test that repeated configuration does not stack handlers."""
        configure_logging()
        logger = configure_logging()
        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING

    def test_invalid_level(self, monkeypatch):
        """Test unknown level names."""
        monkeypatch.setenv("PREN_LOG_LEVEL", "LOUD")
        with pytest.raises(ConfigurationError):
            configure_logging(reload_settings().logging)

    def test_invalid_format(self, monkeypatch):
        """Test unknown formats."""
        monkeypatch.setenv("PREN_LOG_FORMAT", "xml")
        with pytest.raises(ConfigurationError):
            configure_logging(reload_settings().logging)
