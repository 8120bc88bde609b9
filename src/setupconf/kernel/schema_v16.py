"""Component configuration shapes written by Cabal 1.16 and below.

There is no single ``componentsConfigs`` field: the library lives in
``libraryConfig`` (``Nothing`` or ``Just (...)``) and executables, test
suites and benchmarks each have their own list of ``(name, info)`` pairs.
"""

from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .errors import FieldNotFoundError, SchemaParseError
from .fields import field_value_text
from .package import ExtractedDependency, PackageIdentifier
from .schema_common import InstalledPackageId, SchemaAdapter, Version, read_field, validate_shape
from .shown import ShownValueError, read_shown_prefix

SCHEMA = "v16"
LIBRARY_FIELD = "libraryConfig"
COMPONENT_FIELDS = ("executableConfigs", "testSuiteConfigs", "benchmarkConfigs")


class PackageNameV16(BaseModel):
    constructor: Literal["PackageName"]
    args: Tuple[str]

    model_config = ConfigDict(extra="forbid")


class PackageIdentifierV16(BaseModel):
    constructor: Literal["PackageIdentifier"]
    pkgName: PackageNameV16
    pkgVersion: Version

    model_config = ConfigDict(extra="forbid")


class ComponentLocalBuildInfoV16(BaseModel):
    constructor: Literal["ComponentLocalBuildInfo"]
    componentPackageDeps: List[Tuple[InstalledPackageId, PackageIdentifierV16]]

    model_config = ConfigDict(extra="forbid")


class ComponentConfigsV16(BaseModel):
    components: List[Tuple[str, ComponentLocalBuildInfoV16]]

    model_config = ConfigDict(extra="forbid")


def _library_config(blob: str) -> Optional[ComponentLocalBuildInfoV16]:
    try:
        text = field_value_text(blob, LIBRARY_FIELD)
    except FieldNotFoundError:
        return None  # no library component recorded at all
    try:
        value = read_shown_prefix(text)
    except ShownValueError as e:
        raise SchemaParseError(SCHEMA, LIBRARY_FIELD, str(e)) from e

    constructor = value.get("constructor") if isinstance(value, dict) else None
    args = value.get("args", []) if isinstance(value, dict) else []
    if constructor == "Nothing" and not args:
        return None
    if constructor == "Just" and len(args) == 1:
        return validate_shape(SCHEMA, LIBRARY_FIELD, ComponentLocalBuildInfoV16, args[0])
    raise SchemaParseError(SCHEMA, LIBRARY_FIELD, f"expected Nothing or Just, got {text[:40]!r}")


def _component_configs(blob: str, field: str) -> List[ComponentLocalBuildInfoV16]:
    value = read_field(SCHEMA, blob, field)
    configs = validate_shape(SCHEMA, field, ComponentConfigsV16, {"components": value})
    return [clbi for _, clbi in configs.components]


def parse_dependencies(blob: str) -> List[ExtractedDependency]:
    """Read library, executable, test suite and benchmark dependencies, in that order."""
    components: List[ComponentLocalBuildInfoV16] = []
    for field in COMPONENT_FIELDS:
        components.extend(_component_configs(blob, field))
    library = _library_config(blob)
    if library is not None:
        components.insert(0, library)

    deps = []
    for clbi in components:
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
    description="Cabal <= 1.16 (libraryConfig and per-kind component configs)",
    parse_dependencies=parse_dependencies,
)
