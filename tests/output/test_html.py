"""Tests for the HTML license page formatter."""
from typing import Any

from license_tools.models.identity import ArtifactIdentity
from license_tools.models.library import LibraryRecord
from license_tools.output.html import DEFAULT_TITLE, LicenseHtmlFormatter
from license_tools.output.payload import record_payload


def _payload(descriptor: str, **fields: Any) -> dict[str, Any]:
    return record_payload(
        LibraryRecord(artifact_id=ArtifactIdentity.parse(descriptor), **fields)
    )


class TestLicenseHtmlFormatter:
    """Tests for LicenseHtmlFormatter."""

    def test_page_structure(self) -> None:
        """Test that a full HTML document is produced."""
        html = LicenseHtmlFormatter().format_payloads([])

        assert html.startswith("<!DOCTYPE html>")
        assert f"<title>{DEFAULT_TITLE}</title>" in html
        assert "</html>" in html

    def test_custom_title(self) -> None:
        """Test that the title can be changed."""
        html = LicenseHtmlFormatter(title="Third-party software").format_payloads([])

        assert "<h1>Third-party software</h1>" in html

    def test_libraries_in_order(self) -> None:
        """Test that libraries appear in payload order."""
        payloads = [
            _payload("com.b:two:1", library_name="Two", license="MIT", copyright_holder="B"),
            _payload("com.a:one:1", library_name="One", license="MIT", copyright_holder="A"),
        ]

        html = LicenseHtmlFormatter().format_payloads(payloads)

        assert html.index("Two") < html.index("One")

    def test_known_license_uses_its_template(self) -> None:
        """Test that well-known licenses render their text."""
        payload = _payload(
            "com.a:lib:1", library_name="Lib", license="Apache License 2.0", copyright_holder="A"
        )

        section = LicenseHtmlFormatter().render_library(payload)

        assert 'data-license="apache2"' in section
        assert "Licensed under the Apache License, Version 2.0" in section

    def test_unknown_license_uses_default_template(self) -> None:
        """Test the fallback for licenses without a dedicated template."""
        payload = _payload(
            "com.a:lib:1",
            license="Example Corp License",
            license_url="https://example.com/license",
            copyright_holder="A",
        )

        section = LicenseHtmlFormatter().render_library(payload)

        assert 'Licensed under <a href="https://example.com/license">Example Corp License</a>.' in section

    def test_copyright_and_notice(self) -> None:
        """Test that the statement and notice are shown."""
        payload = _payload(
            "com.a:lib:1",
            license="MIT",
            copyright_holder="Example Inc",
            year="2020",
            notice="Includes fonts.",
        )

        section = LicenseHtmlFormatter().render_library(payload)

        assert "Copyright © 2020 Example Inc. All rights reserved." in section
        assert '<p class="notice">Includes fonts.</p>' in section

    def test_name_links_to_project(self) -> None:
        """Test that the library name links to its URL when known."""
        payload = _payload(
            "com.a:lib:1", library_name="Lib", url="https://lib.example", license="MIT",
            copyright_holder="A",
        )

        section = LicenseHtmlFormatter().render_library(payload)

        assert '<h2><a href="https://lib.example">Lib</a></h2>' in section

    def test_name_falls_back_to_artifact(self) -> None:
        """Test that the artifact name is shown without a library name."""
        section = LicenseHtmlFormatter().render_library(
            _payload("com.a:lib:1", license="MIT", copyright_holder="A")
        )

        assert "<h2>lib</h2>" in section

    def test_values_are_escaped(self) -> None:
        """Test that manifest text cannot inject markup."""
        payload = _payload(
            "com.a:lib:1",
            library_name="<script>alert(1)</script>",
            license="MIT",
            copyright_holder="Foo & Bar",
        )

        html = LicenseHtmlFormatter().format_payloads([payload])

        assert "<script>" not in html
        assert "&lt;script&gt;" in html
        assert "Foo &amp; Bar" in html

    def test_html_payload_name_is_escaped_once(self) -> None:
        """Test that the pre-escaped library name is not escaped again."""
        record = LibraryRecord(
            artifact_id=ArtifactIdentity.parse("com.a:lib:1"),
            library_name="Foo & <Bar>",
            license="MIT",
            copyright_holder="A",
        )

        section = LicenseHtmlFormatter().render_library(record_payload(record, html=True))

        assert "<h2>Foo &amp; &lt;Bar&gt;</h2>" in section
        assert "&amp;amp;" not in section
