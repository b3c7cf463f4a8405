# annotation_refcheck/errors.py
"""
Error types for the infrastructure around the checker.

Unresolvable references inside doc comments are never errors: they are
skipped silently by the resolver.  The exceptions below cover the parts
of the tool that read files supplied by the user (dump files, config
files) and are turned into exit code 2 by the CLI.

    RefcheckError (base)
    ├── DumpFormatError   - malformed or unreadable dump file
    └── ConfigError       - malformed config file or bad option value
"""

from __future__ import annotations

from typing import Optional


class RefcheckError(Exception):
    """Base class for all annotation-refcheck infrastructure errors."""

    def __init__(self, message: str, source: Optional[str] = None) -> None:
        self.message = message
        self.source = source
        super().__init__(self.__str__())

    def __str__(self) -> str:
        if self.source:
            return f"{self.source}: {self.message}"
        return self.message


class DumpFormatError(RefcheckError):
    """The dump file does not describe a valid code base."""


class ConfigError(RefcheckError):
    """The configuration file or an option value is invalid."""


__all__ = [
    "RefcheckError",
    "DumpFormatError",
    "ConfigError",
]
