"""Public API for setupconf.

High-level functions that take a project (a ``Cradle`` or a project root)
and return complete, structured results. Callers should use these instead
of importing from ``_internal``.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional, Union

from setupconf.cradle import Cradle, discover_cradle
from setupconf.kernel.dependencies import resolve_with_schema
from setupconf.kernel.errors import RegenerationError
from setupconf.kernel.flags import FlagAssignment, resolve_flags
from setupconf.kernel.header import parse_header
from setupconf.kernel.package import ExtractedDependency, PackageIdentifier
from setupconf.kernel.world import WorldSnapshot, is_setup_config_valid, stale_inputs
from setupconf._internal.configure import run_configure
from setupconf._internal.io.setup_config import read_setup_config
from setupconf._internal.io.world import capture_cradle_world, has_world_changed

logger = logging.getLogger(__name__)

Project = Union[Cradle, str, os.PathLike]


def _normalize_cradle(project: Project) -> Cradle:
    """Normalize project input to a Cradle."""
    if isinstance(project, Cradle):
        return project
    return discover_cradle(Path(project))


def _normalize_identity(identity: Union[PackageIdentifier, str]) -> PackageIdentifier:
    if isinstance(identity, PackageIdentifier):
        return identity
    return PackageIdentifier.parse(identity)


def _regenerate(cradle: Cradle, reason: str) -> None:
    try:
        run_configure(cradle)
    except RegenerationError as e:
        raise RegenerationError(
            f"{reason}, regeneration was attempted, regeneration failed: {e}",
            returncode=e.returncode,
            stderr=e.stderr,
        ) from e


def capture_world(project: Project) -> WorldSnapshot:
    """Capture the current world of a project."""
    return capture_cradle_world(_normalize_cradle(project))


def world_changed(previous: WorldSnapshot, project: Project) -> bool:
    """True if the project's world differs from ``previous`` in any field."""
    return has_world_changed(previous, _normalize_cradle(project))


def is_artifact_valid(project: Project) -> bool:
    """True if the project's setup-config exists and is not older than its inputs."""
    cradle = _normalize_cradle(project)
    world = capture_cradle_world(cradle)
    valid = is_setup_config_valid(world)
    if not valid:
        logger.info("setup-config is stale: %s", ", ".join(stale_inputs(world)))
    return valid


def get_config(project: Project) -> str:
    """Return the setup-config text, regenerating it first if it is stale.

    If reading the artifact fails after the validity check, configure is
    run once more and the read is retried.

    Raises:
        MissingInputError: if the package cache cannot be stat'ed
        RegenerationError: if running configure fails
        OSError: if the artifact still can't be read after regeneration
    """
    cradle = _normalize_cradle(project)
    if not is_artifact_valid(cradle):
        _regenerate(cradle, "cache was invalid")

    path = cradle.setup_config_file
    try:
        return read_setup_config(path)
    except OSError as e:
        logger.warning("Reading %s failed (%s), running configure again", path, e)
        _regenerate(cradle, f"reading {path} failed")
    return read_setup_config(path)


def get_dependencies(
    project: Project,
    own_identity: Optional[Union[PackageIdentifier, str]] = None,
) -> List[ExtractedDependency]:
    """Return the external package dependencies of all project components.

    ``own_identity`` defaults to the package named in the artifact header.

    Raises:
        DependencyParseError: if no schema adapter can read the artifact
        HeaderParseError: if no identity is given and the header is unreadable
    """
    config = get_config(project)
    identity = _normalize_identity(own_identity) if own_identity is not None else parse_header(config).package
    result = resolve_with_schema(config, identity)
    logger.debug(
        "Read %d dependencies of %s with schema %s",
        len(result.dependencies), identity, result.schema,
    )
    return result.dependencies


def get_flags(project: Project) -> FlagAssignment:
    """Return the flag assignment the project was configured with.

    Raises:
        FlagParseError: if the flag assignment cannot be read
    """
    return resolve_flags(get_config(project))
