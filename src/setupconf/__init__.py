"""setupconf: validity checks and fact extraction for Cabal setup-config files."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("setupconf")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from setupconf.api import (
    capture_world,
    get_config,
    get_dependencies,
    get_flags,
    is_artifact_valid,
    world_changed,
)
from setupconf.codes import ErrorCode
from setupconf.cradle import Cradle, discover_cradle, load_cradle
from setupconf.kernel.errors import SetupConfigError
from setupconf.kernel.flags import FlagAssignment
from setupconf.kernel.package import ExtractedDependency, PackageIdentifier
from setupconf.kernel.world import WorldSnapshot

__all__ = [
    "__version__",
    "capture_world",
    "get_config",
    "get_dependencies",
    "get_flags",
    "is_artifact_valid",
    "world_changed",
    "Cradle",
    "discover_cradle",
    "load_cradle",
    "ErrorCode",
    "SetupConfigError",
    "FlagAssignment",
    "ExtractedDependency",
    "PackageIdentifier",
    "WorldSnapshot",
]
