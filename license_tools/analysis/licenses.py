"""License name normalization for grouping records in reports."""
from __future__ import annotations

import re
from typing import Optional

# Ordered (pattern, key) pairs; first match wins. LGPL must be checked
# before GPL, and BSD variants before plain BSD.
LICENSE_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\bapache\b.*\b2(\.0)?\b|\basl\s*2(\.0)?\b|\bapache-2\.0\b"), "apache2"),
    (re.compile(r"\bmit\b"), "mit"),
    (re.compile(r"\bbsd\b.*\b(2|two)[- ]clause|\bbsd-2-clause\b|simplified bsd"), "bsd_2_clauses"),
    (re.compile(r"\bbsd\b"), "bsd_3_clauses"),
    (re.compile(r"\bisc\b"), "isc"),
    (re.compile(r"\bmozilla\b.*\b2(\.0)?\b|\bmpl[- ]?2(\.0)?\b"), "mpl2"),
    (re.compile(r"\beclipse\b.*\b2(\.0)?\b|\bepl[- ]?2(\.0)?\b"), "epl2"),
    (re.compile(r"\beclipse\b|\bepl\b"), "epl1"),
    (re.compile(r"\blesser\b.*\bv?3\b|\blgpl[- ]?v?3"), "lgpl3"),
    (re.compile(r"\blesser\b|\blibrary general\b|\blgpl(v?\d)?\b"), "lgpl2_1"),
    (re.compile(r"\bgeneral public license\b.*\bv?3\b|\bgpl[- ]?v?3"), "gpl3"),
    (re.compile(r"\bgeneral public license\b|\bgpl(v?\d)?\b"), "gpl2"),
    (re.compile(r"\bcc0\b|creative commons zero"), "cc0"),
    (re.compile(r"\bunlicense\b"), "unlicense"),
    (re.compile(r"\bpublic domain\b"), "public_domain"),
]

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize_license(license_name: Optional[str]) -> Optional[str]:
    """Map a free-form license name to a stable grouping key.

    Well-known licenses map to short keys such as ``apache2`` or ``mit``.
    Anything else is lower-cased with runs of non-alphanumeric characters
    collapsed to ``_``.

    Args:
        license_name: License name as written in the manifest or descriptor.

    Returns:
        Normalized key, or None if the license is empty.
    """
    if not license_name or not license_name.strip():
        return None

    lowered = license_name.strip().lower()
    for pattern, key in LICENSE_PATTERNS:
        if pattern.search(lowered):
            return key

    return _NON_ALNUM.sub("_", lowered).strip("_") or None
