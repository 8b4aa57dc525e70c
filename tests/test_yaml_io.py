"""Tests for YAML file reading helpers."""
from pathlib import Path

import pytest
from pydantic import ValidationError

from license_tools.exceptions import ManifestError
from license_tools.models.config import LicenseToolsConfig
from license_tools.yaml_io import format_validation_errors, read_yaml_file


class TestReadYamlFile:
    """Tests for read_yaml_file."""

    def test_reads_yaml(self, tmp_path: Path) -> None:
        """Test that a YAML document is parsed."""
        path = tmp_path / "doc.yml"
        path.write_text("- a: 1\n- b: two\n")

        assert read_yaml_file(path, ManifestError, "manifest") == [{"a": 1}, {"b": "two"}]

    def test_reads_json(self, tmp_path: Path) -> None:
        """Test that JSON documents are accepted."""
        path = tmp_path / "doc.json"
        path.write_text('{"name": "app", "subprojects": []}')

        assert read_yaml_file(path, ManifestError, "graph") == {"name": "app", "subprojects": []}

    def test_empty_file_is_none(self, tmp_path: Path) -> None:
        """Test that an empty file parses to None."""
        path = tmp_path / "doc.yml"
        path.write_text("")

        assert read_yaml_file(path, ManifestError, "manifest") is None

    def test_missing_file_raises_given_error(self, tmp_path: Path) -> None:
        """Test that the caller's error type and label are used."""
        with pytest.raises(ManifestError, match="Cannot read manifest"):
            read_yaml_file(tmp_path / "missing.yml", ManifestError, "manifest")

    def test_syntax_error_raises_given_error(self, tmp_path: Path) -> None:
        """Test that YAML syntax errors are wrapped."""
        path = tmp_path / "doc.yml"
        path.write_text("key: [unclosed\n")

        with pytest.raises(ManifestError, match="Invalid YAML syntax in manifest"):
            read_yaml_file(path, ManifestError, "manifest")


class TestFormatValidationErrors:
    """Tests for format_validation_errors."""

    def test_locates_each_error(self) -> None:
        """Test that every error is prefixed with its field location."""
        with pytest.raises(ValidationError) as exc_info:
            LicenseToolsConfig.model_validate({"ecosystem": "cargo", "typo": 1})

        message = format_validation_errors(exc_info.value)

        assert "ecosystem: " in message
        assert "typo: " in message
        assert "; " in message
