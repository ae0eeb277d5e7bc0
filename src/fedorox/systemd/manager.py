import logging
logger = logging.getLogger(__name__)
import subprocess
from typing import Optional


class SystemdManager:
    def enable_now(self, *units: str):
        """Enable and start units in a single systemctl call."""
        if not units:
            return
        cmd = ["systemctl", "enable", "--now", *units]
        logger.info(f"Enabling {', '.join(units)}")
        subprocess.run(cmd, check=True)

    def daemon_reload(self):
        """Make systemd regenerate mount units from /etc/fstab."""
        subprocess.run(["systemctl", "daemon-reload"], check=True)

    def set_hostname(self, hostname: str):
        subprocess.run(["hostnamectl", "set-hostname", hostname], check=True)

    def get_hostname(self) -> Optional[str]:
        try:
            res = subprocess.run(["hostnamectl", "hostname"], capture_output=True, text=True, check=True)
            return res.stdout.strip() or None
        except (subprocess.CalledProcessError, FileNotFoundError):
            return None
