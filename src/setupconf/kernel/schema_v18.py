"""Component configuration shapes written by Cabal 1.18 to 1.20."""

from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .package import ExtractedDependency, PackageIdentifier
from .schema_common import (
    ComponentName,
    InstalledPackageId,
    SchemaAdapter,
    Version,
    read_field,
    validate_shape,
)

SCHEMA = "v18"
FIELD = "componentsConfigs"


class PackageNameV18(BaseModel):
    """``PackageName "base"`` (positional newtype)."""
    constructor: Literal["PackageName"]
    args: Tuple[str]

    model_config = ConfigDict(extra="forbid")


class PackageIdentifierV18(BaseModel):
    constructor: Literal["PackageIdentifier"]
    pkgName: PackageNameV18
    pkgVersion: Version

    model_config = ConfigDict(extra="forbid")


class LibraryName(BaseModel):
    constructor: Literal["LibraryName"]
    args: Tuple[str]

    model_config = ConfigDict(extra="forbid")


class ComponentLocalBuildInfoV18(BaseModel):
    constructor: Literal[
        "LibComponentLocalBuildInfo",
        "ExeComponentLocalBuildInfo",
        "TestComponentLocalBuildInfo",
        "BenchComponentLocalBuildInfo",
    ]
    componentPackageDeps: List[Tuple[InstalledPackageId, PackageIdentifierV18]]
    componentLibraries: Optional[List[LibraryName]] = None  # library component only

    model_config = ConfigDict(extra="forbid")


class ComponentsConfigsV18(BaseModel):
    components: List[Tuple[ComponentName, ComponentLocalBuildInfoV18, List[ComponentName]]]

    model_config = ConfigDict(extra="forbid")


def parse_dependencies(blob: str) -> List[ExtractedDependency]:
    """Read every component's package dependencies, in blob order."""
    value = read_field(SCHEMA, blob, FIELD)
    configs = validate_shape(SCHEMA, FIELD, ComponentsConfigsV18, {"components": value})
    deps = []
    for _, clbi, _ in configs.components:
        for ipid, pkgid in clbi.componentPackageDeps:
            package = PackageIdentifier.from_branch(
                pkgid.pkgName.args[0],
                pkgid.pkgVersion.versionBranch,
                pkgid.pkgVersion.versionTags,
            )
            deps.append(ExtractedDependency(installed_id=ipid.value, package=package))
    return deps


ADAPTER = SchemaAdapter(
    name=SCHEMA,
    description="Cabal 1.18 - 1.20 (componentsConfigs, positional PackageName)",
    parse_dependencies=parse_dependencies,
)
