"""Ordered schema adapters and the newest-first fallback chain."""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from . import schema_v16, schema_v18, schema_v21
from .errors import DependencyParseError, FieldNotFoundError, HeaderParseError, SchemaParseError, SetupConfigError
from .header import parse_header
from .package import ExtractedDependency
from .schema_common import SchemaAdapter

# Newest first. The first adapter that reads the blob decides the result.
SCHEMA_ADAPTERS: Sequence[SchemaAdapter] = (
    schema_v21.ADAPTER,
    schema_v18.ADAPTER,
    schema_v16.ADAPTER,
)


@dataclass(frozen=True)
class SchemaResult:
    """Dependencies read by a single adapter, before any filtering."""
    schema: str
    dependencies: List[ExtractedDependency]


def _producer(blob: str) -> Optional[str]:
    try:
        return parse_header(blob).producer
    except HeaderParseError:
        return None


def parse_with_fallback(blob: str, adapters: Sequence[SchemaAdapter] = SCHEMA_ADAPTERS) -> SchemaResult:
    """Try each adapter in order and return the first success.

    Raises DependencyParseError holding every adapter's failure, chained to
    the last one, if none of them can read the blob.
    """
    failures: Dict[str, SetupConfigError] = {}
    last: Optional[SetupConfigError] = None
    for adapter in adapters:
        try:
            dependencies = adapter.parse_dependencies(blob)
        except (FieldNotFoundError, SchemaParseError) as e:
            failures[adapter.name] = e
            last = e
            continue
        return SchemaResult(schema=adapter.name, dependencies=dependencies)
    raise DependencyParseError(failures, producer=_producer(blob)) from last
