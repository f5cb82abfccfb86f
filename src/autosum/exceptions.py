"""Exception hierarchy for list-autosum.

The numeric parser and list aggregator never raise; these exceptions belong
to the outer layers (configuration, document loading, CLI).
"""


class AutosumError(Exception):
    """Base exception for all list-autosum errors."""


class ConfigError(AutosumError):
    """Raised when configuration is invalid or missing."""


class DocumentLoadError(AutosumError):
    """Raised when a document tree cannot be read or validated."""
