"""Exceptions raised while checking and reading a setup-config artifact."""

from __future__ import annotations

from typing import Dict, Optional

from setupconf.codes import ErrorCode


class SetupConfigError(Exception):
    """Base exception for setupconf errors."""
    code: ErrorCode = ErrorCode.PARSE_ERROR


class MissingInputError(SetupConfigError):
    """Raised when a required filesystem input cannot be stat'ed."""
    code = ErrorCode.MISSING_INPUT

    def __init__(self, path: str, cause: OSError):
        self.path = path
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(f"Required input is missing or unreadable: {path} ({reason})")


class CradleError(SetupConfigError):
    """Raised when a project cradle cannot be discovered or loaded."""
    code = ErrorCode.CRADLE_ERROR


class FieldNotFoundError(SetupConfigError, ValueError):
    """Raised when a named field cannot be located in the artifact text.

    ``appears_in_blob`` tells apart a field that is truly absent from one
    whose name occurs somewhere but not in the ``name = value`` position.
    """
    code = ErrorCode.FIELD_NOT_FOUND

    def __init__(self, field: str, appears_in_blob: bool, reason: Optional[str] = None):
        self.field = field
        self.appears_in_blob = appears_in_blob
        self.reason = reason
        msg = (
            f"failed extracting {field} from input, "
            f"input contained `{field}'? {appears_in_blob}"
        )
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class SchemaParseError(SetupConfigError, ValueError):
    """Raised when a field was found but does not have a schema's shape."""
    code = ErrorCode.SCHEMA_PARSE_FAILURE

    def __init__(self, schema: str, field: str, cause: str):
        self.schema = schema
        self.field = field
        self.cause = cause
        super().__init__(f"schema {schema}: reading {field} failed ({cause})")


class HeaderParseError(SetupConfigError, ValueError):
    """Raised when the artifact's first line is not a Cabal header."""
    code = ErrorCode.HEADER_PARSE_FAILURE


class ParseError(SetupConfigError, ValueError):
    """Base for resolver failures (dependencies, flags)."""
    code = ErrorCode.PARSE_ERROR


class DependencyParseError(ParseError):
    """Raised when no schema adapter could read the component dependencies."""

    def __init__(self, failures: Dict[str, SetupConfigError], producer: Optional[str] = None):
        self.failures = failures
        self.producer = producer
        lines = ["no schema could read the component dependencies"]
        if producer:
            lines[0] += f" of an artifact written by {producer}"
        for schema, failure in failures.items():
            lines.append(f"  {schema}: {failure}")
        super().__init__("\n".join(lines))


class FlagParseError(ParseError):
    """Raised when the configured flag assignment cannot be read."""


class RegenerationError(SetupConfigError):
    """Raised when regenerating the artifact fails."""
    code = ErrorCode.REGENERATION_FAILURE

    def __init__(self, message: str, returncode: Optional[int] = None, stderr: Optional[str] = None):
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)
