import logging

from pydantic import SecretStr

from fedorox.mounts.manager import MountManager
from fedorox.mounts.models import CredentialsFile, MountSpec
from fedorox.pkgs.base import PackageManager
from fedorox.prompts import Prompter

logger = logging.getLogger(__name__)


def build_cifs_spec(server: str, share: str, mount_point: str, credentials_path: str, user: str) -> MountSpec:
    return MountSpec(
        source=f"//{server}/{share}",
        mount_point=mount_point,
        filesystem_type="cifs",
        options=[
            f"credentials={credentials_path}",
            "vers=3.0",
            f"uid={user}",
            f"gid={user}",
            "nofail",
        ],
    )


class CifsSetup:
    def __init__(
        self,
        prompter: Prompter,
        package_manager: PackageManager,
        mount_manager: MountManager,
        credentials_path: str,
        user: str,
        packages=("cifs-utils",),
    ):
        self.prompter = prompter
        self.package_manager = package_manager
        self.mount_manager = mount_manager
        self.credentials_path = credentials_path
        self.user = user
        self.packages = list(packages)

    def run(self) -> bool:
        logger.info("Setting up CIFS mounts...")
        if not self.prompter.confirm("Do you want to set up CIFS/SMB network shares?"):
            logger.info("Skipping CIFS mount setup")
            return True

        server = self.prompter.ask("Enter server IP address (e.g., 192.168.0.2)")
        share = self.prompter.ask("Enter share name (e.g., media)")
        mount_point = self.prompter.ask("Enter mount point (e.g., /mnt/media)")
        if not (server and share and mount_point):
            logger.error("Server, share name and mount point are all required")
            return False

        username = self.prompter.ask("Enter CIFS username")
        password = self.prompter.ask("Enter CIFS password", hide_input=True)

        try:
            self.package_manager.install(*self.packages)
        except Exception as e:
            logger.error(f"Failed to install {' '.join(self.packages)}: {e}")
            return False

        spec = build_cifs_spec(server, share, mount_point, self.credentials_path, self.user)
        credentials = CredentialsFile(
            path=self.credentials_path,
            username=username,
            password=SecretStr(password),
        )
        return self.mount_manager.ensure_mount(spec, credentials)
