import click

@click.group()
def mounts():
    """Manage persistent mounts."""
    pass

@mounts.command(name="cifs")
@click.pass_context
def mount_cifs(ctx):
    """Interactively mount a CIFS/SMB share."""
    from fedorox.cli.utils import get_context
    provision = get_context(ctx)
    if not provision.cifs().run():
        ctx.exit(1)

@mounts.command(name="device")
@click.argument("source")
@click.argument("mount_point")
@click.option("--fstype", default="auto", help="Filesystem type.")
@click.option("--option", "options", multiple=True, help="Mount option (repeatable).")
@click.option("--no-persist", is_flag=True, help="Do not add an /etc/fstab entry.")
@click.pass_context
def mount_device(ctx, source, mount_point, fstype, options, no_persist):
    """Mount SOURCE (e.g. UUID=...) at MOUNT_POINT and persist it."""
    from fedorox.cli.utils import get_context
    from fedorox.mounts.models import MountSpec
    provision = get_context(ctx)
    spec = MountSpec(
        source=source,
        mount_point=mount_point,
        filesystem_type=fstype,
        options=list(options) or ["defaults", "nofail"],
        persistent_entry=not no_persist,
    )
    if not provision.mounts().ensure_mount(spec):
        ctx.exit(1)
