import logging
import re
import subprocess
from typing import Dict, List

from fedorox.errors import ProvisionAborted
from fedorox.preflight.models import SubvolumeCheckResult
from fedorox.prompts import Prompter

logger = logging.getLogger(__name__)

CONFIRM_ANSWER = "yes"


def subvolume_pattern(name: str) -> "re.Pattern[str]":
    """Match a `btrfs subvolume list` line for any accepted spelling of `name`.

    Layouts name the same subvolume differently: `log`, `@log`, `@var_log`
    or `var_log`.
    """
    n = re.escape(name)
    return re.compile(rf" path ({n}|@{n}|@var_{n}|var_{n})$", re.MULTILINE)


class PreflightChecker:
    def __init__(self, prompter: Prompter, critical_subvolumes: Dict[str, str], root: str = "/"):
        self.prompter = prompter
        self.critical_subvolumes = critical_subvolumes
        self.root = root

    def _list_subvolumes(self) -> str:
        result = subprocess.run(
            ["btrfs", "subvolume", "list", self.root],
            capture_output=True, text=True, check=True
        )
        return result.stdout

    def check_subvolume(self, name: str) -> bool:
        try:
            listing = self._list_subvolumes()
        except (subprocess.CalledProcessError, OSError) as e:
            logger.debug(f"Subvolume listing failed: {e}")
            return False
        return subvolume_pattern(name).search(listing) is not None

    def inspect(self) -> List[SubvolumeCheckResult]:
        return [
            SubvolumeCheckResult(path=path, is_subvolume=self.check_subvolume(name))
            for name, path in self.critical_subvolumes.items()
        ]

    def run(self) -> List[SubvolumeCheckResult]:
        """Check the critical paths and ask the operator to confirm a poor layout.

        Raises ProvisionAborted unless the operator answers exactly "yes".
        """
        results = self.inspect()
        offending = [r.path for r in results if not r.is_subvolume]
        if not offending:
            logger.info("Critical directories are btrfs subvolumes")
            return results

        for path in offending:
            logger.warning(f"{path} is not a btrfs subvolume")
        logger.warning("Snapshots will be larger and rollbacks may misbehave.")

        answer = self.prompter.ask("Continue anyway? (yes/no)")
        if answer != CONFIRM_ANSWER:
            logger.error("Script terminated by operator.")
            raise ProvisionAborted("operator declined subvolume layout warning")
        return results
