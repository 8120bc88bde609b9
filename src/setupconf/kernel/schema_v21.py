"""Component configuration shapes written by Cabal >= 1.21.

From 1.21 on, ``PackageName`` is shown in record syntax
(``PackageName {unPackageName = "base"}``) and every local build info
variant carries renaming data that is not needed here.
"""

from typing import List, Literal, Tuple

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

SCHEMA = "v21"
FIELD = "componentsConfigs"


class PackageNameV21(BaseModel):
    constructor: Literal["PackageName"]
    unPackageName: str

    model_config = ConfigDict(extra="forbid")


class PackageIdentifierV21(BaseModel):
    constructor: Literal["PackageIdentifier"]
    pkgName: PackageNameV21
    pkgVersion: Version

    model_config = ConfigDict(extra="forbid")


class ComponentLocalBuildInfoV21(BaseModel):
    constructor: Literal[
        "LibComponentLocalBuildInfo",
        "ExeComponentLocalBuildInfo",
        "TestComponentLocalBuildInfo",
        "BenchComponentLocalBuildInfo",
    ]
    componentPackageDeps: List[Tuple[InstalledPackageId, PackageIdentifierV21]]

    model_config = ConfigDict(extra="ignore")


class ComponentsConfigsV21(BaseModel):
    components: List[Tuple[ComponentName, ComponentLocalBuildInfoV21, List[ComponentName]]]

    model_config = ConfigDict(extra="forbid")


def _dependency(ipid: InstalledPackageId, pkgid: PackageIdentifierV21) -> ExtractedDependency:
    package = PackageIdentifier.from_branch(
        pkgid.pkgName.unPackageName,
        pkgid.pkgVersion.versionBranch,
        pkgid.pkgVersion.versionTags,
    )
    return ExtractedDependency(installed_id=ipid.value, package=package)


def parse_dependencies(blob: str) -> List[ExtractedDependency]:
    """Read every component's package dependencies, in blob order."""
    value = read_field(SCHEMA, blob, FIELD)
    configs = validate_shape(SCHEMA, FIELD, ComponentsConfigsV21, {"components": value})
    return [
        _dependency(ipid, pkgid)
        for _, clbi, _ in configs.components
        for ipid, pkgid in clbi.componentPackageDeps
    ]


ADAPTER = SchemaAdapter(
    name=SCHEMA,
    description="Cabal >= 1.21 (componentsConfigs, record PackageName)",
    parse_dependencies=parse_dependencies,
)
