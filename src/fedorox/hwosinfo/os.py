import os
from typing import Dict

from fedorox.hwosinfo.models import OSInfo, SystemCheck

OS_RELEASE_PATH = "/etc/os-release"


def read_os_release(path: str = OS_RELEASE_PATH) -> Dict[str, str]:
    """Parse an os-release file into a dict with lower-cased keys."""
    data = {}
    with open(path, "r") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            data[key.lower()] = value.strip().strip('"').strip("'")
    return data


def get_os_info(path: str = OS_RELEASE_PATH) -> OSInfo:
    try:
        data = read_os_release(path)
    except OSError:
        return OSInfo()
    return OSInfo(
        id=data.get("id"),
        name=data.get("name"),
        version_id=data.get("version_id"),
        pretty_name=data.get("pretty_name"),
    )


def is_root() -> bool:
    return os.geteuid() == 0


def is_target_distro(marker: str, path: str = OS_RELEASE_PATH) -> bool:
    """True if the raw os-release text mentions the distribution marker."""
    try:
        with open(path, "r") as f:
            return marker in f.read()
    except OSError:
        return False


def check_system(marker: str, path: str = OS_RELEASE_PATH) -> SystemCheck:
    return SystemCheck(
        is_root=is_root(),
        is_target_distro=is_target_distro(marker, path),
        os=get_os_info(path),
    )
