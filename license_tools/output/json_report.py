"""JSON license report formatter."""
import json
from typing import Any


class LicenseJsonFormatter:
    """Format report payloads as a JSON document.

    The document has a single ``libraries`` key holding the payloads in
    display order.
    """

    def format_payloads(self, payloads: list[dict[str, Any]]) -> str:
        """Format payloads as a JSON string.

        Args:
            payloads: Report payloads in display order.

        Returns:
            JSON string representation of the report.
        """
        return json.dumps({"libraries": payloads}, indent=2, ensure_ascii=False)
