"""Tests for the setup-config header line and package identifiers."""

import pytest

from setupconf.kernel.errors import HeaderParseError
from setupconf.kernel.header import parse_header
from setupconf.kernel.package import PackageIdentifier
from conftest import load_fixture


@pytest.mark.parametrize(
    "fixture,producer,compiler",
    [
        ("setup-config-1.22.txt", "Cabal-1.22.4.0", "ghc-7.10"),
        ("setup-config-1.18.txt", "Cabal-1.18.1.5", "ghc-7.8"),
        ("setup-config-1.16.txt", "Cabal-1.16.0", "ghc-7.6"),
    ],
)
def test_fixture_headers(fixture, producer, compiler):
    header = parse_header(load_fixture(fixture))
    assert header.package == PackageIdentifier(name="demo", version="0.1.0.0")
    assert header.producer == producer
    assert header.compiler == compiler


def test_cabal_version():
    header = parse_header("Saved package config for demo-0.1.0.0 written by Cabal-1.22.4.0 using ghc-7.10\n")
    assert header.cabal_version == "1.22.4.0"


def test_missing_header():
    with pytest.raises(HeaderParseError):
        parse_header("LocalBuildInfo {buildDir = \"dist/build\"}")


def test_header_with_bad_package_identifier():
    with pytest.raises(HeaderParseError):
        parse_header("Saved package config for demo written by Cabal-1.22.4.0 using ghc-7.10\n")


def test_package_identifier_parse():
    pkg = PackageIdentifier.parse("unordered-containers-0.2.5.1")
    assert pkg.name == "unordered-containers"
    assert pkg.version == "0.2.5.1"
    assert str(pkg) == "unordered-containers-0.2.5.1"


@pytest.mark.parametrize("text", ["base", "-4.8", "base-", "base-four"])
def test_package_identifier_parse_rejects(text):
    with pytest.raises(ValueError):
        PackageIdentifier.parse(text)


def test_package_identifier_from_branch():
    assert str(PackageIdentifier.from_branch("base", [4, 8, 1, 0])) == "base-4.8.1.0"
    assert PackageIdentifier.from_branch("x", [1, 0], ["rc1"]).version == "1.0-rc1"
