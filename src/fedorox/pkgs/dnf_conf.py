import logging
import os
import re
import shutil
from typing import Any, Dict, List

from fedorox.config.logging import log_success

logger = logging.getLogger(__name__)

SECTION_RE = re.compile(r"^\s*\[(?P<name>[^\]]+)\]")


def set_main_options(lines: List[str], options: Dict[str, Any]) -> List[str]:
    """Set `key=value` lines in the [main] section, leaving every other line untouched."""
    lines = list(lines)
    if lines and not lines[-1].endswith("\n"):
        lines[-1] += "\n"

    start = end = None
    for i, line in enumerate(lines):
        match = SECTION_RE.match(line)
        if not match:
            continue
        if start is not None:
            end = i
            break
        if match.group("name").strip() == "main":
            start = i
    if start is None:
        lines.append("[main]\n")
        start = len(lines) - 1
    if end is None:
        end = len(lines)

    for key, value in options.items():
        entry = f"{key}={value}\n"
        key_re = re.compile(rf"^{re.escape(key)}\s*=")
        for i in range(start + 1, end):
            if key_re.match(lines[i]):
                lines[i] = entry
                break
        else:
            lines.insert(end, entry)
            end += 1
    return lines


def optimize_dnf_config(path: str, options: Dict[str, Any]) -> bool:
    """Back up dnf.conf and set the given keys in its [main] section."""
    if not os.path.exists(path):
        logger.error(f"DNF configuration not found at {path}")
        return False

    logger.info("Optimizing DNF configuration...")
    try:
        shutil.copy2(path, f"{path}.bak")
        with open(path, "r") as f:
            lines = f.readlines()
        with open(path, "w") as f:
            f.writelines(set_main_options(lines, options))
    except OSError as e:
        logger.error(f"Failed to update {path}: {e}")
        return False

    log_success(logger, "DNF configuration updated successfully")
    return True
