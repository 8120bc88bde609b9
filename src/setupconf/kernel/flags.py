"""Resolve the flag assignment the project was configured with."""

from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, ConfigDict

from .errors import FlagParseError, SetupConfigError
from .fields import extract_field
from .shown import read_shown

OUTER_FIELD = "configFlags"
INNER_FIELD = "configConfigurationsFlags"


class FlagAssignment(BaseModel):
    """Flag names and values in the order they appear in the artifact."""
    flags: List[Tuple[str, bool]]

    model_config = ConfigDict(frozen=True, extra="forbid")

    def as_dict(self) -> Dict[str, bool]:
        return dict(self.flags)

    def names(self) -> List[str]:
        return [name for name, _ in self.flags]


def _flag_name(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        # FlagName {unFlagName = "x"}
        if value.get("constructor") == "FlagName" and isinstance(value.get("unFlagName"), str):
            return value["unFlagName"]
        args = value.get("args")
        # FlagName "x"
        if value.get("constructor") == "FlagName" and args and len(args) == 1 and isinstance(args[0], str):
            return args[0]
        # bare name
        if args == [] and set(value) == {"constructor", "args"}:
            return value["constructor"]
    raise ValueError(f"not a flag name: {value!r}")


def _assignment(value: Any) -> FlagAssignment:
    if not isinstance(value, list):
        raise ValueError(f"expected a list of flag pairs, got {type(value).__name__}")
    flags = []
    for item in value:
        if not (isinstance(item, tuple) and len(item) == 2 and isinstance(item[1], bool)):
            raise ValueError(f"expected a (flag, Bool) pair, got {item!r}")
        flags.append((_flag_name(item[0]), item[1]))
    return FlagAssignment(flags=flags)


def resolve_flags(blob: str) -> FlagAssignment:
    """Return the flag assignment from ``configFlags.configConfigurationsFlags``.

    Raises:
        FlagParseError: chained to the extraction or parse failure
    """
    try:
        outer = extract_field(blob, OUTER_FIELD)
        inner = extract_field(outer, INNER_FIELD)
        return _assignment(read_shown(inner))
    except (SetupConfigError, ValueError) as e:
        raise FlagParseError(f"reading flag assignment failed: {e}") from e
