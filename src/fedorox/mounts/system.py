import os
import subprocess

import psutil

from fedorox.mounts.base import MountController
from fedorox.mounts.models import MountSpec
from fedorox.systemd.manager import SystemdManager


class SystemMountController(MountController):
    def __init__(self, systemd: SystemdManager):
        self.systemd = systemd

    def is_mounted(self, spec: MountSpec) -> bool:
        mount_point = os.path.realpath(spec.mount_point)
        for part in psutil.disk_partitions(all=True):
            if part.mountpoint == mount_point:
                return True
        return self._source_mounted(spec.source)

    def _source_mounted(self, source: str) -> bool:
        # findmnt resolves UUID=... and //server/share sources
        try:
            result = subprocess.run(
                ["findmnt", "--noheadings", "--source", source],
                capture_output=True, text=True
            )
        except FileNotFoundError:
            return False
        return result.returncode == 0 and bool(result.stdout.strip())

    def mount(self, spec: MountSpec):
        subprocess.run(
            ["mount", "-t", spec.filesystem_type, spec.source, spec.mount_point,
             "-o", spec.options_string],
            check=True
        )

    def reload(self):
        self.systemd.daemon_reload()
