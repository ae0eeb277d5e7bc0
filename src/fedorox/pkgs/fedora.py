import logging
import shutil
import subprocess
from typing import Optional

from fedorox.pkgs.base import PackageManager

logger = logging.getLogger(__name__)


class FedoraPackageManager(PackageManager):
    def __init__(self):
        self._pm: Optional[str] = None

    @property
    def pm(self) -> str:
        # resolved on first use so the distro check can run first
        if self._pm is None:
            if shutil.which("dnf"):
                self._pm = "dnf"
            elif shutil.which("yum"):
                self._pm = "yum"
            else:
                raise Exception("No package manager found (dnf or yum)")
        return self._pm

    def install(self, *packages: str):
        logger.info(f"Installing {' '.join(packages)}...")
        subprocess.run([self.pm, "install", "-y", *packages], check=True)

    def is_installed(self, package: str) -> bool:
        result = subprocess.run(["rpm", "-q", package], capture_output=True, text=True)
        return result.returncode == 0

    def upgrade(self):
        logger.info("Upgrading all installed packages...")
        subprocess.run([self.pm, "upgrade", "-y"], check=True)

    def clean(self):
        subprocess.run([self.pm, "clean", "packages"], check=True)
