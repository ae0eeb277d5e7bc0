import logging
import subprocess
from datetime import datetime
from typing import Callable, Dict, List, Optional, Set

import psutil

from fedorox.config.logging import log_success
from fedorox.pkgs.base import PackageManager
from fedorox.snapshots.base import SnapshotService
from fedorox.snapshots.models import Snapshot, SnapshotConfig, SnapshotSubject
from fedorox.systemd.manager import SystemdManager

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d-%H-%M-%S"


def get_filesystem_type(mountpoint: str = "/") -> Optional[str]:
    for part in psutil.disk_partitions(all=True):
        if part.mountpoint == mountpoint:
            return part.fstype
    return None


class SnapshotManager:
    def __init__(
        self,
        service: SnapshotService,
        package_manager: PackageManager,
        systemd: SystemdManager,
        paths: Dict[str, str],
        labels: Dict[str, str],
        packages: List[str],
        timers: List[str],
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.service = service
        self.package_manager = package_manager
        self.systemd = systemd
        self.paths = paths
        self.labels = labels
        self.packages = packages
        self.timers = timers
        self.clock = clock
        self._configured: Set[SnapshotSubject] = set()

    def ensure_snapshot_config(self, subject: SnapshotSubject, path: str) -> SnapshotConfig:
        """Create the snapper config for `subject` unless it already exists."""
        if subject in self._configured or self.service.config_exists(subject):
            self._configured.add(subject)
            return SnapshotConfig(subject=subject, backing_path=path, config_exists=True)

        logger.info(f"Creating snapper config '{subject.value}' for {path}")
        self.service.create_config(subject, path)
        self._configured.add(subject)
        return SnapshotConfig(subject=subject, backing_path=path, config_exists=True)

    def create_snapshot(self, subject: SnapshotSubject, label: str) -> Snapshot:
        """Always takes a new snapshot; identical descriptions are allowed."""
        created_at = self.clock()
        description = f"{created_at.strftime(TIMESTAMP_FORMAT)}_{label}"
        self.service.create(subject, description)
        logger.info(f"Snapshot created: {subject.value}-{description}")
        return Snapshot(subject=subject, description=description, created_at=created_at)

    def snapshot_subject(self, subject: SnapshotSubject, label: Optional[str] = None) -> Optional[Snapshot]:
        path = self.paths[subject.value]
        label = label or self.labels.get(subject.value, subject.value)
        try:
            self.ensure_snapshot_config(subject, path)
        except (subprocess.CalledProcessError, OSError) as e:
            logger.error(f"Failed to create snapper config '{subject.value}': {e}")
            return None
        try:
            return self.create_snapshot(subject, label)
        except (subprocess.CalledProcessError, OSError) as e:
            logger.error(f"Failed to create {subject.value} snapshot: {e}")
            return None

    def setup_snapshots(self) -> bool:
        logger.info("Setting up Snapper for system snapshots...")

        fstype = get_filesystem_type("/")
        if fstype != "btrfs":
            logger.warning(f"Root filesystem is {fstype or 'unknown'}, not btrfs; snapshots may not work correctly")

        try:
            self.package_manager.install(*self.packages)
        except Exception as e:
            logger.error(f"Failed to install {' '.join(self.packages)}: {e}")
            return False
        if self.packages and not self.package_manager.is_installed(self.packages[0]):
            logger.error(f"{self.packages[0]} is not installed, skipping snapshots")
            return False

        try:
            self.systemd.enable_now(*self.timers)
        except (subprocess.CalledProcessError, OSError) as e:
            logger.error(f"Failed to enable snapper timers: {e}")

        ok = True
        for subject in SnapshotSubject:
            if subject.value not in self.paths:
                continue
            if self.snapshot_subject(subject) is None:
                ok = False

        if ok:
            log_success(logger, "Snapper configured and initial snapshots created")
        return ok
