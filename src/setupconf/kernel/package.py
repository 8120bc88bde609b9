"""Package identity models shared by the resolvers."""

import re
from typing import Sequence

from pydantic import BaseModel, ConfigDict

_VERSION_RE = re.compile(r"^\d+(\.\d+)*(-[A-Za-z0-9]+)*$")


class PackageIdentifier(BaseModel):
    """A package name and its dotted version, e.g. ``base`` / ``4.8.1.0``."""
    name: str
    version: str

    model_config = ConfigDict(frozen=True, extra="forbid")

    @classmethod
    def parse(cls, text: str) -> "PackageIdentifier":
        """Parse the ``<name>-<version>`` form Cabal displays."""
        name, sep, version = text.strip().rpartition("-")
        if not sep or not name or not _VERSION_RE.match(version):
            raise ValueError(f"not a package identifier: {text!r}")
        return cls(name=name, version=version)

    @classmethod
    def from_branch(cls, name: str, branch: Sequence[int], tags: Sequence[str] = ()) -> "PackageIdentifier":
        version = ".".join(str(part) for part in branch)
        version += "".join(f"-{tag}" for tag in tags)
        return cls(name=name, version=version)

    def __str__(self) -> str:
        return f"{self.name}-{self.version}"


class ExtractedDependency(BaseModel):
    """An installed package a component of the project depends on."""
    installed_id: str  # InstalledPackageId, e.g. base-4.8.1.0-4f7206fd...
    package: PackageIdentifier

    model_config = ConfigDict(frozen=True, extra="forbid")
