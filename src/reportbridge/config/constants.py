"""Configuration constants.

Values here are not user-configurable: report defaults rooted at the
conventional reports directory, and numeric limits of the report formats.
"""

# =============================================================================
# Report Discovery Defaults
# =============================================================================

REPORTS_DIR = "sonar-reports"
"""Conventional directory (relative to the project base dir) holding reports."""

DEFAULT_COBERTURA_PATTERN = f"{REPORTS_DIR}/coverage*.xml"
DEFAULT_OCLINT_PATTERN = f"{REPORTS_DIR}/*oclint.xml"
DEFAULT_SWIFTLINT_PATTERN = f"{REPORTS_DIR}/*swiftlint.txt"
DEFAULT_TAILOR_PATTERN = f"{REPORTS_DIR}/*tailor.txt"

# =============================================================================
# Report Value Limits
# =============================================================================

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1
"""Signed 32-bit range accepted for numeric report attributes."""

# =============================================================================
# Project Layout
# =============================================================================

CONFIG_DIR_NAME = ".reportbridge"
"""Per-project directory holding config.yaml."""
