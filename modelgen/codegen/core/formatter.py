"""Run the target language's source formatter over the output directory."""

import subprocess
from pathlib import Path
from typing import Sequence, Union

from ...logging_config import get_logger
from .errors import FormatError

logger = get_logger(__name__)


def run_formatter(command: Sequence[str], directory: Union[str, Path]) -> None:
    """
    Run ``command`` with ``directory`` appended, e.g. ``gofmt -w models``.

    Generated code is expected to always format cleanly, so any failure
    points at a generation bug and is raised.

    Raises:
        FormatError: If the formatter is missing or exits non-zero
    """
    if not command:
        raise FormatError("No formatter command configured")

    argv = [*command, str(directory)]
    logger.info("Running %s", " ".join(argv))
    try:
        result = subprocess.run(argv, capture_output=True, text=True, check=False)
    except OSError as e:
        raise FormatError(f"Fail to run {command[0]}, {e}") from e

    if result.returncode != 0:
        logger.error("%s", result.stderr.strip())
        raise FormatError(
            f"Fail to run {command[0]} on {directory} "
            f"(exit status {result.returncode}): {result.stderr.strip()}"
        )
