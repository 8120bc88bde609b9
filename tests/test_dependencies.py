"""Tests for dependency resolution across schema versions."""

import pytest

from setupconf.kernel.dependencies import filter_dependencies, resolve_dependencies, resolve_with_schema
from setupconf.kernel.errors import DependencyParseError, FieldNotFoundError, SchemaParseError
from setupconf.kernel.package import ExtractedDependency, PackageIdentifier
from setupconf.kernel.schema_common import SchemaAdapter
from setupconf.kernel.schemas import SCHEMA_ADAPTERS, parse_with_fallback
from conftest import OWN_PACKAGE, load_fixture

OWN = PackageIdentifier.parse(OWN_PACKAGE)


def _dep(installed_id: str) -> ExtractedDependency:
    # installed ids are <name>-<version>-<hash>
    return ExtractedDependency(
        installed_id=installed_id,
        package=PackageIdentifier.parse(installed_id.rsplit("-", 1)[0]),
    )


def _names(deps):
    return [str(dep.package) for dep in deps]


def _lbi(components: str) -> str:
    return (
        "Saved package config for demo-0.1.0.0 written by Cabal-1.22.4.0 using ghc-7.10\n"
        "LocalBuildInfo {buildDir = \"dist/build\", componentsConfigs = " + components
        + ", withPrograms = []}"
    )


def _clbi(kind: str, *pairs: str) -> str:
    deps = ",".join(
        f'(InstalledPackageId "{ipid}",PackageIdentifier {{pkgName = PackageName {{unPackageName = "{name}"}}, '
        f"pkgVersion = Version {{versionBranch = [{branch}], versionTags = []}}}})"
        for ipid, name, branch in (pair.split("|") for pair in pairs)
    )
    return f"{kind}ComponentLocalBuildInfo {{componentPackageDeps = [{deps}], componentPackageRenaming = fromList []}}"


def test_schema_order_is_newest_first():
    assert [adapter.name for adapter in SCHEMA_ADAPTERS] == ["v21", "v18", "v16"]


def test_cabal_1_22():
    result = resolve_with_schema(load_fixture("setup-config-1.22.txt"), OWN)
    assert result.schema == "v21"
    assert result.dependencies == [
        _dep("base-4.8.1.0-4f7206fd964c629946bb89db72c80011"),
        _dep("containers-0.5.6.2-59326c33e30ec8f6afd574cbac625bbb"),
        _dep("hspec-2.1.10-0bd0c4fb1c7c6d2ce6bf6ea3c1a6a92d"),
    ]


def test_cabal_1_18():
    result = resolve_with_schema(load_fixture("setup-config-1.18.txt"), OWN)
    assert result.schema == "v18"
    assert _names(result.dependencies) == ["base-4.7.0.1", "bytestring-0.10.4.0", "text-1.1.1.3"]
    assert result.dependencies[2].installed_id == "text-1.1.1.3-f8caa2a9a6add14bce2af2d2a3d8a2d4"


def test_cabal_1_16_library_first():
    result = resolve_with_schema(load_fixture("setup-config-1.16.txt"), OWN)
    assert result.schema == "v16"
    assert _names(result.dependencies) == ["base-4.6.0.1", "mtl-2.1.2", "QuickCheck-2.6"]


@pytest.mark.parametrize(
    "fixture", ["setup-config-1.22.txt", "setup-config-1.18.txt", "setup-config-1.16.txt"]
)
def test_self_dependency_excluded_and_no_duplicates(fixture):
    deps = resolve_dependencies(load_fixture(fixture), OWN)
    assert all(dep.package != OWN for dep in deps)
    assert all(dep.installed_id != "demo-0.1.0.0-inplace" for dep in deps)
    assert len(deps) == len(set(deps))


def test_other_own_identity_keeps_demo():
    deps = resolve_dependencies(load_fixture("setup-config-1.22.txt"), PackageIdentifier.parse("other-1.0"))
    assert "demo-0.1.0.0" in _names(deps)


def test_empty_components():
    assert resolve_dependencies(_lbi("[]"), OWN) == []


def test_component_order_then_pair_order():
    blob = _lbi(
        "[(CLibName," + _clbi("Lib", "zlib-0.5-aa|zlib|0,5", "array-0.5-bb|array|0,5") + ",[]),"
        "(CExeName \"demo\"," + _clbi("Exe", "array-0.5-bb|array|0,5", "text-1.2-cc|text|1,2") + ",[CLibName])]"
    )
    assert _names(resolve_dependencies(blob, OWN)) == ["zlib-0.5", "array-0.5", "text-1.2"]


def test_filter_dependencies():
    base = _dep("base-4.8.1.0-x")
    own = ExtractedDependency(installed_id="demo-0.1.0.0-inplace", package=OWN)
    assert filter_dependencies([base, own, base], OWN) == [base]


def test_all_schemas_fail():
    blob = "Saved package config for demo-0.1.0.0 written by Cabal-9.9 using ghc-9.9\nLocalBuildInfo {buildDir = \"x\"}"
    with pytest.raises(DependencyParseError) as excinfo:
        resolve_dependencies(blob, OWN)
    err = excinfo.value
    assert list(err.failures) == ["v21", "v18", "v16"]
    assert all(isinstance(failure, FieldNotFoundError) for failure in err.failures.values())
    assert err.failures["v21"].appears_in_blob is False
    assert err.producer == "Cabal-9.9"
    assert "Cabal-9.9" in str(err)
    assert err.__cause__ is err.failures["v16"]


def test_malformed_span_is_a_schema_failure():
    blob = _lbi("[(CLibName, ???)]")
    with pytest.raises(DependencyParseError) as excinfo:
        resolve_dependencies(blob, OWN)
    assert isinstance(excinfo.value.failures["v21"], SchemaParseError)
    assert isinstance(excinfo.value.failures["v18"], SchemaParseError)


def test_unbalanced_span_is_field_not_found():
    blob = _lbi("[(CLibName, LibComponentLocalBuildInfo {componentPackageDeps = []}, []")
    with pytest.raises(DependencyParseError) as excinfo:
        resolve_dependencies(blob, OWN)
    failure = excinfo.value.failures["v21"]
    assert isinstance(failure, FieldNotFoundError)
    assert failure.appears_in_blob is True


def test_fallback_stops_at_first_success():
    calls = []

    def failing(blob):
        calls.append("failing")
        raise FieldNotFoundError("somethingElse", False)

    def working(blob):
        calls.append("working")
        return [_dep("base-4.8.1.0-x")]

    def unreachable(blob):
        calls.append("unreachable")
        return []

    adapters = [
        SchemaAdapter("a", "fails", failing),
        SchemaAdapter("b", "works", working),
        SchemaAdapter("c", "never tried", unreachable),
    ]
    result = parse_with_fallback("", adapters)
    assert result.schema == "b"
    assert calls == ["failing", "working"]


def test_unexpected_errors_are_not_swallowed():
    def broken(blob):
        raise KeyError("bug")

    with pytest.raises(KeyError):
        parse_with_fallback("", [SchemaAdapter("x", "broken", broken)])
