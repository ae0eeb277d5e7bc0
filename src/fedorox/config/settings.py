import os
import pwd
import subprocess
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field

from fedorox.mounts.models import MountSpec

CONFIG_SEARCH_PATHS = [
    "fedorox.yaml",
    "~/.config/fedorox/config.yaml",
    "/etc/fedorox/config.yaml",
]

# Environment variable -> config field
ENV_OVERRIDES = {
    "FEDOROX_LOG_FILE": "log_file",
    "FEDOROX_FSTAB_PATH": "fstab_path",
    "FEDOROX_CREDENTIALS_PATH": "credentials_path",
    "FEDOROX_OS_RELEASE_PATH": "os_release_path",
    "FEDOROX_DNF_CONF_PATH": "dnf_conf_path",
    "FEDOROX_HOSTNAME": "hostname",
}


def resolve_actual_user() -> str:
    """The user who invoked the tool, even when running under sudo."""
    user = os.getenv("SUDO_USER")
    if user:
        return user
    try:
        result = subprocess.run(["logname"], capture_output=True, text=True, check=True)
        if result.stdout.strip():
            return result.stdout.strip()
    except (subprocess.CalledProcessError, FileNotFoundError):
        pass
    return os.getenv("USER", "root")


def resolve_home(user: str) -> str:
    try:
        return pwd.getpwnam(user).pw_dir
    except KeyError:
        return os.path.expanduser("~")


class ProvisionConfig(BaseModel):
    actual_user: str
    actual_home: str
    log_file: str

    os_release_path: str = "/etc/os-release"
    distro_marker: str = "Fedora"

    # logical subvolume name -> path it should back
    critical_subvolumes: Dict[str, str] = {"log": "/var/log", "cache": "/var/cache"}

    snapshot_paths: Dict[str, str] = {"root": "/", "home": "/home"}
    snapshot_labels: Dict[str, str] = {"root": "RootFirst", "home": "HomeFirst"}
    snapper_packages: List[str] = ["snapper", "libdnf5-plugin-actions"]
    snapper_timers: List[str] = ["snapper-timeline.timer", "snapper-cleanup.timer"]

    fstab_path: str = "/etc/fstab"
    credentials_path: str = "/etc/cifs-credentials"
    cifs_packages: List[str] = ["cifs-utils"]
    reload_systemd: bool = True
    devices: List[MountSpec] = Field(default_factory=list)

    dnf_conf_path: str = "/etc/dnf/dnf.conf"
    dnf_options: Dict[str, Any] = {"fastestmirror": "True", "max_parallel_downloads": "10"}

    upgrade_system: bool = True
    update_firmware: bool = True

    hostname: Optional[str] = None

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "ProvisionConfig":
        """Build the run configuration from defaults, a YAML file and the environment."""
        data = {}
        path = config_path or find_config_file()
        if path:
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise ValueError(f"Configuration file {path} must contain a mapping")

        for env_name, field_name in ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value:
                data[field_name] = value

        user = data.get("actual_user") or resolve_actual_user()
        home = data.get("actual_home") or resolve_home(user)
        data["actual_user"] = user
        data["actual_home"] = home
        data.setdefault("log_file", os.path.join(home, "fedora_setup.log"))
        return cls(**data)


def find_config_file() -> Optional[str]:
    for candidate in CONFIG_SEARCH_PATHS:
        path = os.path.expanduser(candidate)
        if os.path.exists(path):
            return path
    return None
