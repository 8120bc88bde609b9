"""Error code constants carried by setupconf exceptions.

These constants prevent stringly-typed error codes and let callers branch
on the kind of failure without matching on messages.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes attached to every ``SetupConfigError``."""

    # Filesystem inputs
    MISSING_INPUT = "MISSING_INPUT"
    CRADLE_ERROR = "CRADLE_ERROR"

    # Artifact text
    FIELD_NOT_FOUND = "FIELD_NOT_FOUND"
    SCHEMA_PARSE_FAILURE = "SCHEMA_PARSE_FAILURE"
    HEADER_PARSE_FAILURE = "HEADER_PARSE_FAILURE"
    PARSE_ERROR = "PARSE_ERROR"

    # External collaborators
    REGENERATION_FAILURE = "REGENERATION_FAILURE"
