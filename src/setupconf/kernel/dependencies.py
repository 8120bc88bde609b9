"""Resolve the external package dependencies of all project components."""

from typing import List, Sequence

from .package import ExtractedDependency, PackageIdentifier
from .schema_common import SchemaAdapter
from .schemas import SCHEMA_ADAPTERS, SchemaResult, parse_with_fallback


def filter_dependencies(
    dependencies: Sequence[ExtractedDependency],
    own_identity: PackageIdentifier,
) -> List[ExtractedDependency]:
    """Drop self-dependencies and duplicates, keeping first-seen order."""
    seen = set()
    kept = []
    for dep in dependencies:
        if dep.package == own_identity or dep in seen:
            continue
        seen.add(dep)
        kept.append(dep)
    return kept


def resolve_with_schema(
    blob: str,
    own_identity: PackageIdentifier,
    adapters: Sequence[SchemaAdapter] = SCHEMA_ADAPTERS,
) -> SchemaResult:
    """Like resolve_dependencies, also reporting which schema read the blob."""
    result = parse_with_fallback(blob, adapters)
    return SchemaResult(
        schema=result.schema,
        dependencies=filter_dependencies(result.dependencies, own_identity),
    )


def resolve_dependencies(
    blob: str,
    own_identity: PackageIdentifier,
    adapters: Sequence[SchemaAdapter] = SCHEMA_ADAPTERS,
) -> List[ExtractedDependency]:
    """Return the deduplicated external dependencies recorded in ``blob``.

    Dependencies on ``own_identity`` (internal components of the project)
    are excluded. Order is component order in the blob, then pair order
    within each component.

    Raises:
        DependencyParseError: if no schema adapter can read the blob
    """
    return resolve_with_schema(blob, own_identity, adapters).dependencies
