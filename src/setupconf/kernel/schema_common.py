"""Shapes and helpers shared by the versioned schema adapters."""

from dataclasses import dataclass
from typing import Any, Callable, List, Literal, Tuple, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import SchemaParseError
from .fields import extract_field
from .package import ExtractedDependency
from .shown import ShownValueError, read_shown

M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class SchemaAdapter:
    """One producer-version strategy for reading component dependencies."""
    name: str
    description: str
    parse_dependencies: Callable[[str], List[ExtractedDependency]]


class Version(BaseModel):
    """``Version {versionBranch = [..], versionTags = [..]}``."""
    constructor: Literal["Version"]
    versionBranch: List[int]
    versionTags: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class InstalledPackageId(BaseModel):
    """``InstalledPackageId "base-4.8.1.0-<hash>"``."""
    constructor: Literal["InstalledPackageId"]
    args: Tuple[str]

    model_config = ConfigDict(extra="forbid")

    @property
    def value(self) -> str:
        return self.args[0]


class ComponentName(BaseModel):
    """``CLibName`` or ``CExeName "name"`` and friends."""
    constructor: Literal["CLibName", "CExeName", "CTestName", "CBenchName"]
    args: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


def read_field(schema: str, blob: str, field: str) -> Any:
    """Extract ``field`` from ``blob`` and read its span as a shown value.

    FieldNotFoundError propagates unchanged; a span that is not a shown
    value becomes a SchemaParseError for ``schema``.
    """
    span = extract_field(blob, field)
    try:
        return read_shown(span)
    except ShownValueError as e:
        raise SchemaParseError(schema, field, str(e)) from e


def validate_shape(schema: str, field: str, model: Type[M], data: Any) -> M:
    """Validate ``data`` against ``model``, reporting failures for ``schema``."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        cause = f"{e.error_count()} validation error(s), first at {location}: {first['msg']}"
        raise SchemaParseError(schema, field, cause) from e
