"""Report assembly and formatters for license-tools."""

from license_tools.output.html import LicenseHtmlFormatter
from license_tools.output.json_report import LicenseJsonFormatter
from license_tools.output.payload import assemble_payloads, record_payload
from license_tools.output.writer import write_report

__all__ = [
    "LicenseHtmlFormatter",
    "LicenseJsonFormatter",
    "assemble_payloads",
    "record_payload",
    "write_report",
]
