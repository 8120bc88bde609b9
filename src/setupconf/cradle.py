"""Project cradle: where a project's descriptor, package db and artifact live."""

import json
import os
from pathlib import Path
from typing import Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from setupconf.kernel.errors import CradleError

CRADLE_FILE = "setupconf.json"
PACKAGE_CACHE = "package.cache"
SETUP_CONFIG = "setup-config"
DEFAULT_DIST_DIR = "dist"


class Cradle(BaseModel):
    """Inputs needed to check and regenerate a project's setup-config."""
    root_dir: Path
    package_db: Path  # directory holding package.cache
    descriptor_path: Optional[Path] = None  # <name>.cabal, if the project has one
    dist_dir: str = DEFAULT_DIST_DIR
    configure_command: Tuple[str, ...] = ("cabal", "configure")

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def package_cache_file(self) -> Path:
        return self.package_db / PACKAGE_CACHE

    @property
    def setup_config_file(self) -> Path:
        return setup_config_file(self)


def setup_config_path(dist_dir: str = DEFAULT_DIST_DIR) -> str:
    """Path of the artifact relative to the project root, usually ``dist/setup-config``."""
    return f"{dist_dir}/{SETUP_CONFIG}"


def setup_config_file(cradle: Cradle) -> Path:
    """Absolute path of the cradle's setup-config artifact."""
    return cradle.root_dir / setup_config_path(cradle.dist_dir)


def find_descriptor(root_dir: Path) -> Optional[Path]:
    """Return the single ``*.cabal`` file in ``root_dir``, or None if there is none."""
    candidates = sorted(p for p in root_dir.glob("*.cabal") if p.is_file() and not p.name.startswith("."))
    if len(candidates) > 1:
        names = ", ".join(p.name for p in candidates)
        raise CradleError(f"Multiple cabal files found in {root_dir}: {names}")
    return candidates[0] if candidates else None


def _resolve(base: Path, value: Union[str, os.PathLike]) -> Path:
    path = Path(value)
    return path if path.is_absolute() else (base / path).resolve()


def load_cradle(path: Union[str, os.PathLike]) -> Cradle:
    """Load a cradle from a JSON file.

    Relative paths are resolved against the file's directory. ``root_dir``
    defaults to that directory; if ``descriptor_path`` is not given the
    root is searched for a cabal file (an explicit null means none).
    """
    cradle_path = Path(path)
    try:
        data = json.loads(cradle_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise CradleError(f"Failed to read cradle file {cradle_path}: {e}") from e
    if not isinstance(data, dict):
        raise CradleError(f"Cradle file {cradle_path} must contain a JSON object")

    base = cradle_path.resolve().parent
    root_dir = _resolve(base, data.get("root_dir", "."))
    data["root_dir"] = root_dir
    if "package_db" in data and isinstance(data["package_db"], str):
        data["package_db"] = _resolve(base, data["package_db"])
    if "descriptor_path" not in data:
        data["descriptor_path"] = find_descriptor(root_dir)
    elif isinstance(data["descriptor_path"], str):
        data["descriptor_path"] = _resolve(base, data["descriptor_path"])

    try:
        return Cradle(**data)
    except ValidationError as e:
        raise CradleError(f"Invalid cradle file {cradle_path}: {e}") from e


def discover_cradle(
    root_dir: Union[str, os.PathLike],
    package_db: Optional[Union[str, os.PathLike]] = None,
    descriptor_path: Optional[Union[str, os.PathLike]] = None,
    dist_dir: Optional[str] = None,
) -> Cradle:
    """Build a cradle for a project root.

    Without an explicit ``package_db`` the root must contain a
    ``setupconf.json`` cradle file.
    """
    root = Path(root_dir).resolve()
    if not root.is_dir():
        raise CradleError(f"Project root is not a directory: {root}")

    if package_db is None:
        cradle_file = root / CRADLE_FILE
        if not cradle_file.exists():
            raise CradleError(
                f"No package database given and no {CRADLE_FILE} in {root}"
            )
        cradle = load_cradle(cradle_file)
        overrides = {}
        if descriptor_path is not None:
            overrides["descriptor_path"] = _resolve(root, descriptor_path)
        if dist_dir is not None:
            overrides["dist_dir"] = dist_dir
        return cradle.model_copy(update=overrides) if overrides else cradle

    return Cradle(
        root_dir=root,
        package_db=_resolve(root, package_db),
        descriptor_path=_resolve(root, descriptor_path) if descriptor_path is not None else find_descriptor(root),
        dist_dir=dist_dir or DEFAULT_DIST_DIR,
    )
