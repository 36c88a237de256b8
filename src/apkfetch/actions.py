"""
GitHub Actions integration: step outputs.
"""

import os
import uuid
from typing import Mapping, Optional

from apkfetch.constants import ACTIONS_OUTPUT_ENV_VAR
from apkfetch.log_utils import logger


def set_output(name: str, value: str, output_path: Optional[str] = None) -> None:
    """
    Publish one step output.

    Appends `name=value` to the file named by $GITHUB_OUTPUT (or `output_path`);
    outside of Actions the output is only logged. Multi-line values use the
    `name<<delimiter` form so a newline cannot start a new output.
    """
    output_path = output_path or os.environ.get(ACTIONS_OUTPUT_ENV_VAR)
    if not output_path:
        logger.info(f"{name}: {value}")
        return
    with open(output_path, "a", encoding="utf-8") as f:
        if "\n" in value or "\r" in value:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
        else:
            f.write(f"{name}={value}\n")


def write_outputs(outputs: Mapping[str, str], output_path: Optional[str] = None) -> None:
    """Publish every entry of `outputs`; an empty mapping writes nothing."""
    for name, value in outputs.items():
        set_output(name, value, output_path)
