import subprocess

import pytest

from fedorox.config.settings import ProvisionConfig
from fedorox.firmware.base import FirmwareService
from fedorox.mounts.base import MountController
from fedorox.orchestrator.steps import ProvisionContext
from fedorox.pkgs.base import PackageManager
from fedorox.prompts import Prompter
from fedorox.snapshots.base import SnapshotService


class FakePrompter(Prompter):
    def __init__(self, answers=None, confirm=False):
        self.answers = list(answers or [])
        self.confirm_answer = confirm
        self.questions = []

    def ask(self, message, hide_input=False):
        self.questions.append((message, hide_input))
        return self.answers.pop(0) if self.answers else ""

    def confirm(self, message):
        self.questions.append((message, False))
        return self.confirm_answer


class FakePackageManager(PackageManager):
    def __init__(self, fail=False):
        self.fail = fail
        self.fail_upgrade = False
        self.installed = []
        self.upgrades = 0
        self.cleans = 0

    def install(self, *packages):
        if self.fail:
            raise Exception("dnf failed")
        self.installed.extend(packages)

    def is_installed(self, package):
        return package in self.installed

    def upgrade(self):
        if self.fail_upgrade:
            raise Exception("dnf upgrade failed")
        self.upgrades += 1

    def clean(self):
        self.cleans += 1


class FakeFirmware(FirmwareService):
    def __init__(self, updates=False, fail_refresh=False):
        self.updates = updates
        self.fail_refresh = fail_refresh
        self.calls = []

    def refresh(self):
        self.calls.append("refresh")
        if self.fail_refresh:
            raise subprocess.CalledProcessError(1, ["fwupdmgr", "refresh", "--force"])

    def has_updates(self):
        self.calls.append("get-updates")
        return self.updates

    def update(self):
        self.calls.append("update")


class FakeSnapshotService(SnapshotService):
    def __init__(self, existing=(), fail_config=(), fail_create=()):
        self.configs = set(existing)
        self.fail_config = set(fail_config)
        self.fail_create = set(fail_create)
        self.create_config_calls = []
        self.snapshots = []

    def config_exists(self, subject):
        return subject in self.configs

    def create_config(self, subject, path):
        self.create_config_calls.append((subject, path))
        if subject in self.fail_config:
            raise OSError("create-config failed")
        self.configs.add(subject)

    def create(self, subject, description):
        if subject in self.fail_create:
            raise OSError("create failed")
        self.snapshots.append((subject, description))


class FakeMountController(MountController):
    def __init__(self, mounted=(), fail_mount=False):
        self.mounted = set(mounted)
        self.fail_mount = fail_mount
        self.mount_calls = []
        self.reload_calls = 0

    def is_mounted(self, spec):
        return spec.mount_point in self.mounted or spec.source in self.mounted

    def mount(self, spec):
        self.mount_calls.append(spec)
        if self.fail_mount:
            raise OSError("mount error(13): Permission denied")
        self.mounted.add(spec.mount_point)

    def reload(self):
        self.reload_calls += 1


class FakeSystemd:
    def __init__(self):
        self.enabled = []
        self.hostname = None
        self.reloads = 0

    def enable_now(self, *units):
        self.enabled.extend(units)

    def daemon_reload(self):
        self.reloads += 1

    def set_hostname(self, hostname):
        self.hostname = hostname

    def get_hostname(self):
        return self.hostname


@pytest.fixture
def fake_prompter():
    return FakePrompter()


@pytest.fixture
def fake_packages():
    return FakePackageManager()


@pytest.fixture
def fake_snapper():
    return FakeSnapshotService()


@pytest.fixture
def fake_mounts():
    return FakeMountController()


@pytest.fixture
def fake_systemd():
    return FakeSystemd()


@pytest.fixture
def fake_firmware():
    return FakeFirmware()


@pytest.fixture
def fstab_file(tmp_path):
    path = tmp_path / "fstab"
    path.write_text("UUID=aaaa-bbbb / btrfs subvol=root,compress=zstd:1 0 0\n")
    return path


@pytest.fixture
def provision_config(tmp_path, fstab_file):
    os_release = tmp_path / "os-release"
    os_release.write_text('NAME="Fedora Linux"\nID=fedora\nVERSION_ID=41\n')
    dnf_conf = tmp_path / "dnf.conf"
    dnf_conf.write_text("[main]\ngpgcheck=True\n")
    return ProvisionConfig(
        actual_user="alice",
        actual_home=str(tmp_path / "home"),
        log_file=str(tmp_path / "fedora_setup.log"),
        os_release_path=str(os_release),
        fstab_path=str(fstab_file),
        credentials_path=str(tmp_path / "cifs-credentials"),
        dnf_conf_path=str(dnf_conf),
    )


@pytest.fixture
def provision_context(provision_config, fake_prompter, fake_packages, fake_systemd, fake_snapper, fake_mounts,
                      fake_firmware):
    return ProvisionContext(
        config=provision_config,
        prompter=fake_prompter,
        package_manager=fake_packages,
        systemd=fake_systemd,
        snapshot_service=fake_snapper,
        mount_controller=fake_mounts,
        firmware=fake_firmware,
    )
