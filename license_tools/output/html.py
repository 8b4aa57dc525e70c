"""HTML license page formatter."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from jinja2 import Environment, PackageLoader, select_autoescape

from license_tools import __version__

DEFAULT_TITLE = "Open Source Licenses"


class LicenseHtmlFormatter:
    """Render report payloads as a standalone HTML page.

    Each library is rendered with the template for its normalized license
    (``licenses/<key>.html``), falling back to ``licenses/default.html``.
    """

    def __init__(
        self, title: str = DEFAULT_TITLE, environment: Optional[Environment] = None
    ) -> None:
        self._title = title
        self._env = environment or Environment(
            loader=PackageLoader("license_tools", "output/templates"),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def format_payloads(self, payloads: list[dict[str, Any]]) -> str:
        """Format payloads as an HTML document.

        Args:
            payloads: Report payloads in display order.

        Returns:
            The complete HTML page.
        """
        sections = [self.render_library(payload) for payload in payloads]
        layout = self._env.get_template("layout.html")
        return layout.render(
            title=self._title,
            sections=sections,
            generated_at=datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            tool_version=__version__,
        )

    def render_library(self, payload: dict[str, Any]) -> str:
        """Render the section for one library."""
        key = payload.get("normalizedLicense")
        names = [f"licenses/{key}.html"] if key else []
        names.append("licenses/default.html")
        template = self._env.select_template(names)
        return template.render(library=payload)
