import logging
import os
import subprocess
from typing import List, Optional

from fedorox.config.logging import log_success
from fedorox.mounts.base import MountController
from fedorox.mounts.credentials import write_credentials
from fedorox.mounts.fstab import FstabTable
from fedorox.mounts.models import CredentialsFile, MountSpec

logger = logging.getLogger(__name__)


class MountManager:
    def __init__(self, controller: MountController, fstab: FstabTable, reload_systemd: bool = True):
        self.controller = controller
        self.fstab = fstab
        self.reload_systemd = reload_systemd

    def ensure_mount(self, spec: MountSpec, credentials: Optional[CredentialsFile] = None) -> bool:
        """Mount `spec` and record it in the persistent mount table.

        Safe to call repeatedly: an active mount is not mounted again and an
        entry whose source already appears in the table is not appended again.
        Returns False (after logging an ERROR) on the first failing step.
        """
        # 1. Credentials
        if credentials is not None:
            try:
                write_credentials(credentials)
            except OSError as e:
                logger.error(f"Failed to create credentials file {credentials.path}: {e}")
                return False

        # 2. Mount point
        try:
            os.makedirs(spec.mount_point, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create mount point {spec.mount_point}: {e}")
            return False

        # 3. Live mount
        try:
            if self.controller.is_mounted(spec):
                logger.info(f"{spec.source} is already mounted, skipping mount")
            else:
                logger.info(f"Mounting {spec.source} at {spec.mount_point}...")
                self.controller.mount(spec)
        except (subprocess.CalledProcessError, OSError) as e:
            logger.error(f"Failed to mount {spec.source} at {spec.mount_point}: {e}")
            return False

        # 4. Persistent entry
        changed = False
        if spec.persistent_entry:
            try:
                changed = self.fstab.ensure_entry(spec.source, spec.fstab_line())
            except OSError as e:
                logger.error(f"Failed to update {self.fstab.path}: {e}")
                return False
            if not changed:
                logger.info(f"{spec.source} already present in {self.fstab.path}")

        # 5. Reload
        if changed and self.reload_systemd:
            try:
                self.controller.reload()
            except (subprocess.CalledProcessError, OSError) as e:
                logger.warning(f"Could not reload systemd after updating {self.fstab.path}: {e}")

        log_success(logger, f"{spec.source} mounted at {spec.mount_point} and set up for auto-mount on boot")
        return True

    def mount_devices(self, specs: List[MountSpec]) -> bool:
        if not specs:
            logger.info("No local devices configured, skipping")
            return True
        results = [self.ensure_mount(spec) for spec in specs]
        return all(results)
