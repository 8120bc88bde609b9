"""Snapshot of the filesystem state that decides setup-config validity.

The snapshot is a plain value: capturing it from disk lives in
``setupconf._internal.io.world``. Absent files are absent timestamps,
never a sentinel epoch, so a missing artifact can't look fresh.

A ``datetime`` only holds microseconds, so each timestamp is paired with
the exact ``st_mtime_ns`` it was built from. Comparisons and equality use
the nanosecond value.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_ns(mtime: datetime) -> int:
    """Nanoseconds since the epoch of a timezone-aware datetime."""
    return (mtime - _EPOCH) // timedelta(microseconds=1) * 1000


class WorldSnapshot(BaseModel):
    """Modification times of the descriptor, package cache and artifact."""
    descriptor_path: Optional[str] = None
    descriptor_mtime: Optional[datetime] = None  # present iff the descriptor exists
    descriptor_mtime_ns: Optional[int] = None
    package_cache_path: str
    package_cache_mtime: datetime
    package_cache_mtime_ns: Optional[int] = None
    artifact_path: str
    artifact_mtime: Optional[datetime] = None  # present iff the artifact exists
    artifact_mtime_ns: Optional[int] = None

    model_config = ConfigDict(frozen=True, extra="forbid")


def _instant(mtime: Optional[datetime], mtime_ns: Optional[int]) -> Optional[int]:
    if mtime is None:
        return None
    return mtime_ns if mtime_ns is not None else to_ns(mtime)


def _not_newer(mtime: Optional[int], reference: int) -> bool:
    return mtime is None or mtime <= reference


def is_setup_config_valid(world: WorldSnapshot) -> bool:
    """True if the artifact exists and neither input is newer than it.

    Equal timestamps count as fresh. With coarse filesystem timestamps an
    edit landing in the same tick as regeneration goes unnoticed.
    """
    artifact = _instant(world.artifact_mtime, world.artifact_mtime_ns)
    if artifact is None:
        return False
    return (
        _not_newer(_instant(world.descriptor_mtime, world.descriptor_mtime_ns), artifact)
        and _not_newer(_instant(world.package_cache_mtime, world.package_cache_mtime_ns), artifact)
    )


def stale_inputs(world: WorldSnapshot) -> list[str]:
    """Paths of the inputs that make the artifact stale, for diagnostics."""
    artifact = _instant(world.artifact_mtime, world.artifact_mtime_ns)
    if artifact is None:
        return [world.artifact_path]
    stale = []
    descriptor = _instant(world.descriptor_mtime, world.descriptor_mtime_ns)
    if world.descriptor_path and not _not_newer(descriptor, artifact):
        stale.append(world.descriptor_path)
    if not _not_newer(_instant(world.package_cache_mtime, world.package_cache_mtime_ns), artifact):
        stale.append(world.package_cache_path)
    return stale
