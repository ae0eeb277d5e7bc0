import subprocess

from fedorox.snapshots.base import SnapshotService
from fedorox.snapshots.models import SnapshotSubject


class SnapperService(SnapshotService):
    def config_exists(self, subject: SnapshotSubject) -> bool:
        # `snapper list` fails for unknown configs
        try:
            result = subprocess.run(
                ["snapper", "-c", subject.value, "list"],
                capture_output=True, text=True
            )
        except FileNotFoundError:
            return False
        return result.returncode == 0

    def create_config(self, subject: SnapshotSubject, path: str):
        subprocess.run(["snapper", "-c", subject.value, "create-config", path], check=True)

    def create(self, subject: SnapshotSubject, description: str):
        subprocess.run(["snapper", "-c", subject.value, "create", "-d", description], check=True)
