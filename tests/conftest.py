"""Pytest configuration for tests.

No sys.path hacks - tests should import from installed setupconf package.
"""

import os
from pathlib import Path

import pytest

FIXTURES = Path(__file__).resolve().parent / "fixtures"

OWN_PACKAGE = "demo-0.1.0.0"


def load_fixture(name: str) -> str:
    """Return the text of a setup-config fixture, e.g. ``setup-config-1.22.txt``."""
    return (FIXTURES / name).read_text(encoding="utf-8")


def set_mtime(path: Path, seconds: int) -> None:
    """Set both atime and mtime of ``path`` to an exact whole second."""
    ns = seconds * 1_000_000_000
    os.utime(path, ns=(ns, ns))


@pytest.fixture
def project(tmp_path):
    """A configured project: demo.cabal, a package db and dist/setup-config.

    Modification times: descriptor 1000, package cache 1000, artifact 2000,
    so the artifact starts out valid.
    """
    root = tmp_path / "demo"
    root.mkdir()
    descriptor = root / "demo.cabal"
    descriptor.write_text("name: demo\nversion: 0.1.0.0\n", encoding="utf-8")

    package_db = tmp_path / "package.conf.d"
    package_db.mkdir()
    package_cache = package_db / "package.cache"
    package_cache.write_bytes(b"\x00")

    artifact = root / "dist" / "setup-config"
    artifact.parent.mkdir()
    artifact.write_text(load_fixture("setup-config-1.22.txt"), encoding="utf-8")

    set_mtime(descriptor, 1000)
    set_mtime(package_cache, 1000)
    set_mtime(artifact, 2000)
    return root


@pytest.fixture
def cradle(project):
    from setupconf.cradle import Cradle

    return Cradle(
        root_dir=project,
        package_db=project.parent / "package.conf.d",
        descriptor_path=project / "demo.cabal",
    )
