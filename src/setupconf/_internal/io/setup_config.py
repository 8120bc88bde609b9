"""Read the setup-config artifact from disk."""

import os
from pathlib import Path
from typing import Union


def read_setup_config(path: Union[str, os.PathLike]) -> str:
    """Return the full text of the artifact. OSError propagates."""
    return Path(path).read_text(encoding="utf-8")
