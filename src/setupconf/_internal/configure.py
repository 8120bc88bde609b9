"""Regenerate a project's setup-config by running the configure command."""

import logging
import subprocess

from setupconf.cradle import Cradle
from setupconf.kernel.errors import RegenerationError

logger = logging.getLogger(__name__)


def run_configure(cradle: Cradle) -> None:
    """Run ``cabal configure`` (or the cradle's command) in the project root.

    Raises RegenerationError if the command is missing or exits non-zero.
    """
    command = list(cradle.configure_command)
    logger.info("Running %s in %s", " ".join(command), cradle.root_dir)
    try:
        completed = subprocess.run(
            command,
            cwd=cradle.root_dir,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        raise RegenerationError(f"could not run {command[0]}: {e}") from e

    if completed.returncode != 0:
        stderr = completed.stderr.strip()
        msg = f"{' '.join(command)} exited with status {completed.returncode}"
        if stderr:
            msg += f": {stderr}"
        raise RegenerationError(msg, returncode=completed.returncode, stderr=completed.stderr)
    logger.debug("%s finished", " ".join(command))
