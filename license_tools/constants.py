"""Constants for license-tools."""

# Exit codes
EXIT_SUCCESS = 0  # Manifest matches the resolved dependencies
EXIT_ISSUES = 1  # Manifest was out of date and has been rewritten
EXIT_ERROR = 2  # Run failed due to error

# Manifest versions are written with this token so entries survive upgrades
WILDCARD_VERSION = "+"

# Version reported by build tools for first-party modules
UNSPECIFIED_VERSION = "unspecified"

# Placeholder tokens written for fields that need human input.
# They start with "#" so YAML reads them back as comments (empty values).
PLACEHOLDER_NAME = "#NAME#"
PLACEHOLDER_COPYRIGHT_HOLDER = "#COPYRIGHT_HOLDER#"
PLACEHOLDER_YEAR = "#YEAR#"
PLACEHOLDER_LICENSE = "#LICENSE#"
PLACEHOLDER_LICENSE_URL = "#LICENSEURL#"
PLACEHOLDER_URL = "#URL#"
