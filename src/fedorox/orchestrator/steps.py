import logging
import subprocess
from dataclasses import dataclass
from datetime import datetime
from typing import List

from fedorox.config.logging import log_success
from fedorox.config.settings import ProvisionConfig
from fedorox.firmware.base import FirmwareService
from fedorox.hwosinfo.os import is_root, is_target_distro
from fedorox.mounts.base import MountController
from fedorox.mounts.cifs import CifsSetup
from fedorox.mounts.fstab import FstabTable
from fedorox.mounts.manager import MountManager
from fedorox.orchestrator.models import RunResult, StepStatus
from fedorox.orchestrator.pipeline import Orchestrator, Precondition, Step
from fedorox.pkgs.base import PackageManager
from fedorox.pkgs.dnf_conf import optimize_dnf_config
from fedorox.preflight.checker import PreflightChecker
from fedorox.prompts import Prompter
from fedorox.snapshots.base import SnapshotService
from fedorox.snapshots.manager import SnapshotManager
from fedorox.systemd.manager import SystemdManager

logger = logging.getLogger(__name__)


@dataclass
class ProvisionContext:
    """Everything a run needs, built once at startup."""

    config: ProvisionConfig
    prompter: Prompter
    package_manager: PackageManager
    systemd: SystemdManager
    snapshot_service: SnapshotService
    mount_controller: MountController
    firmware: FirmwareService

    def preflight(self) -> PreflightChecker:
        return PreflightChecker(self.prompter, self.config.critical_subvolumes)

    def snapshots(self) -> SnapshotManager:
        return SnapshotManager(
            service=self.snapshot_service,
            package_manager=self.package_manager,
            systemd=self.systemd,
            paths=self.config.snapshot_paths,
            labels=self.config.snapshot_labels,
            packages=self.config.snapper_packages,
            timers=self.config.snapper_timers,
        )

    def mounts(self) -> MountManager:
        return MountManager(
            controller=self.mount_controller,
            fstab=FstabTable(self.config.fstab_path),
            reload_systemd=self.config.reload_systemd,
        )

    def cifs(self) -> CifsSetup:
        return CifsSetup(
            prompter=self.prompter,
            package_manager=self.package_manager,
            mount_manager=self.mounts(),
            credentials_path=self.config.credentials_path,
            user=self.config.actual_user,
            packages=self.config.cifs_packages,
        )


def build_context(config: ProvisionConfig, prompter: Prompter) -> ProvisionContext:
    """Wire the production adapters that call the real system tools."""
    from fedorox.firmware.fwupd import FwupdService
    from fedorox.mounts.system import SystemMountController
    from fedorox.pkgs.fedora import FedoraPackageManager
    from fedorox.snapshots.snapper import SnapperService

    systemd = SystemdManager()
    return ProvisionContext(
        config=config,
        prompter=prompter,
        package_manager=FedoraPackageManager(),
        systemd=systemd,
        snapshot_service=SnapperService(),
        mount_controller=SystemMountController(systemd),
        firmware=FwupdService(),
    )


def set_hostname(ctx: ProvisionContext):
    hostname = ctx.config.hostname
    if not hostname:
        logger.info("No hostname configured, skipping")
        return StepStatus.SKIPPED
    logger.info(f"Setting hostname to {hostname}...")
    try:
        ctx.systemd.set_hostname(hostname)
    except (subprocess.CalledProcessError, OSError) as e:
        logger.error(f"Failed to set hostname: {e}")
        return False
    log_success(logger, f"Hostname set to {hostname}")
    return True


def upgrade_system(ctx: ProvisionContext):
    if not ctx.config.upgrade_system:
        logger.info("System upgrade disabled, skipping")
        return StepStatus.SKIPPED
    logger.info("Updating system packages...")
    try:
        ctx.package_manager.upgrade()
    except Exception as e:
        logger.error(f"System upgrade failed: {e}")
        return False
    log_success(logger, "System updated successfully")
    return True


def update_firmware(ctx: ProvisionContext):
    if not ctx.config.update_firmware:
        logger.info("Firmware updates disabled, skipping")
        return StepStatus.SKIPPED
    logger.info("Checking for firmware updates...")
    try:
        ctx.firmware.refresh()
        if not ctx.firmware.has_updates():
            logger.info("No firmware updates available")
            return StepStatus.SKIPPED
        ctx.firmware.update()
    except (subprocess.CalledProcessError, OSError) as e:
        logger.error(f"Firmware update failed: {e}")
        return False
    log_success(logger, "Firmware updated")
    return True


def cleanup(ctx: ProvisionContext):
    logger.info("Performing cleanup...")
    try:
        ctx.package_manager.clean()
    except Exception as e:
        logger.error(f"Failed to clean package cache: {e}")
        return False
    return True


def build_steps(ctx: ProvisionContext) -> List[Step]:
    return [
        Step("preflight", lambda: ctx.preflight().run(), fatal=True),
        Step("snapshots", lambda: ctx.snapshots().setup_snapshots()),
        Step("dnf_config", lambda: optimize_dnf_config(ctx.config.dnf_conf_path, ctx.config.dnf_options)),
        Step("system_upgrade", lambda: upgrade_system(ctx)),
        Step("firmware", lambda: update_firmware(ctx)),
        Step("hostname", lambda: set_hostname(ctx)),
        Step("cifs_share", lambda: ctx.cifs().run()),
        Step("device_mounts", lambda: ctx.mounts().mount_devices(ctx.config.devices)),
        Step("cleanup", lambda: cleanup(ctx)),
    ]


def build_preconditions(ctx: ProvisionContext) -> List[Precondition]:
    config = ctx.config
    return [
        Precondition("This script must be run as root", is_root),
        Precondition(
            f"This script is designed for {config.distro_marker}",
            lambda: is_target_distro(config.distro_marker, config.os_release_path),
        ),
    ]


def build_orchestrator(ctx: ProvisionContext) -> Orchestrator:
    return Orchestrator(build_steps(ctx), build_preconditions(ctx))


def log_summary(ctx: ProvisionContext, result: RunResult):
    logger.info("=== Setup Summary ===")
    logger.info(f"Hostname: {ctx.systemd.get_hostname() or 'unknown'}")
    logger.info(f"Setup finished at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    logger.info(f"Log file: {ctx.config.log_file}")
    for outcome in result.outcomes:
        logger.info(f"  {outcome.name}: {outcome.status.value}")
    if result.failed_steps:
        logger.warning(f"Steps with errors: {', '.join(result.failed_steps)}")
    else:
        log_success(logger, "Fedora setup completed successfully!")
