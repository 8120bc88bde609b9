"""Capture WorldSnapshot values from the filesystem."""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Tuple, Union

from setupconf.cradle import Cradle
from setupconf.kernel.errors import MissingInputError
from setupconf.kernel.world import WorldSnapshot

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def _mtime(path: Path) -> Tuple[datetime, int]:
    """Return the mtime as a UTC datetime (microseconds) and as exact nanoseconds."""
    mtime_ns = path.stat().st_mtime_ns
    seconds, nanos = divmod(mtime_ns, 1_000_000_000)
    mtime = datetime.fromtimestamp(seconds, tz=timezone.utc).replace(microsecond=nanos // 1000)
    return mtime, mtime_ns


def _mtime_if_exists(path: Path) -> Tuple[Optional[datetime], Optional[int]]:
    try:
        return _mtime(path)
    except (FileNotFoundError, NotADirectoryError):
        return None, None
    except OSError as e:
        raise MissingInputError(str(path), e) from e


def capture_world(
    descriptor_path: Optional[PathLike],
    package_cache_path: PathLike,
    artifact_path: PathLike,
) -> WorldSnapshot:
    """Stat the three inputs that decide whether the artifact is valid.

    A missing descriptor or artifact gives an absent timestamp. A missing
    package cache, or any input that exists but cannot be stat'ed, raises
    MissingInputError.
    """
    descriptor = Path(descriptor_path) if descriptor_path is not None else None
    package_cache = Path(package_cache_path)
    artifact = Path(artifact_path)

    descriptor_mtime, descriptor_ns = _mtime_if_exists(descriptor) if descriptor is not None else (None, None)
    try:
        package_cache_mtime, package_cache_ns = _mtime(package_cache)
    except OSError as e:
        raise MissingInputError(str(package_cache), e) from e
    artifact_mtime, artifact_ns = _mtime_if_exists(artifact)

    world = WorldSnapshot(
        descriptor_path=str(descriptor) if descriptor is not None else None,
        descriptor_mtime=descriptor_mtime,
        descriptor_mtime_ns=descriptor_ns,
        package_cache_path=str(package_cache),
        package_cache_mtime=package_cache_mtime,
        package_cache_mtime_ns=package_cache_ns,
        artifact_path=str(artifact),
        artifact_mtime=artifact_mtime,
        artifact_mtime_ns=artifact_ns,
    )
    logger.debug("Captured world: %s", world)
    return world


def capture_cradle_world(cradle: Cradle) -> WorldSnapshot:
    """Capture the world for a cradle's descriptor, package cache and artifact."""
    return capture_world(cradle.descriptor_path, cradle.package_cache_file, cradle.setup_config_file)


def has_world_changed(previous: WorldSnapshot, cradle: Cradle) -> bool:
    """Recapture the cradle's world and report whether it differs from ``previous``."""
    changed = capture_cradle_world(cradle) != previous
    if changed:
        logger.debug("World changed for %s", cradle.root_dir)
    return changed
