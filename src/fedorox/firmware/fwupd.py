import logging
import subprocess

from fedorox.firmware.base import FirmwareService

logger = logging.getLogger(__name__)

# fwupdmgr exits with 2 when there is nothing to do
NOTHING_TO_DO = 2


class FwupdService(FirmwareService):
    def _run(self, *args: str) -> bool:
        """Run fwupdmgr; False means it had nothing to do."""
        cmd = ["fwupdmgr", *args]
        result = subprocess.run(cmd, capture_output=True, text=True)
        if result.returncode == NOTHING_TO_DO:
            return False
        if result.returncode != 0:
            raise subprocess.CalledProcessError(result.returncode, cmd, result.stdout, result.stderr)
        return True

    def refresh(self):
        self._run("refresh", "--force")

    def has_updates(self) -> bool:
        return self._run("get-updates")

    def update(self):
        logger.info("Applying firmware updates...")
        self._run("update", "-y")
