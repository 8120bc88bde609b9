"""Parse the header line Cabal writes above the shown LocalBuildInfo."""

import re

from pydantic import BaseModel, ConfigDict

from .errors import HeaderParseError
from .package import PackageIdentifier

_HEADER_RE = re.compile(
    r"^Saved package config for (?P<package>\S+) "
    r"written by (?P<producer>\S+)\s+using (?P<compiler>\S+)"
)


class Header(BaseModel):
    """Producer information from the first line of a setup-config file."""
    package: PackageIdentifier
    producer: str  # e.g. Cabal-1.22.4.0
    compiler: str  # e.g. ghc-7.10

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def cabal_version(self) -> str:
        return self.producer.partition("-")[2]


def parse_header(blob: str) -> Header:
    """Parse the header line, raising HeaderParseError if it is missing."""
    first_line = blob.split("\n", 1)[0].strip()
    match = _HEADER_RE.match(first_line)
    if match is None:
        raise HeaderParseError(f"not a setup-config header: {first_line[:80]!r}")
    try:
        package = PackageIdentifier.parse(match.group("package"))
    except ValueError as e:
        raise HeaderParseError(str(e)) from e
    return Header(package=package, producer=match.group("producer"), compiler=match.group("compiler"))
