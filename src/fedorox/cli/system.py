import click

@click.group()
def system():
    """System commands"""
    pass

@system.command(name="check")
@click.pass_context
def check(ctx):
    """Report privilege and distribution checks."""
    from fedorox.cli.utils import load_config
    from fedorox.hwosinfo.os import check_system
    config = load_config(ctx.obj.get("config_path"))
    result = check_system(config.distro_marker, config.os_release_path)
    click.echo(f"OS: {result.os.pretty_name or 'unknown'}")
    click.echo(f"Root: {'yes' if result.is_root else 'no'}")
    click.echo(f"{config.distro_marker}: {'yes' if result.is_target_distro else 'no'}")
    if not (result.is_root and result.is_target_distro):
        ctx.exit(1)
