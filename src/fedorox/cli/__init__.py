import click

from fedorox.cli.mounts import mounts
from fedorox.cli.snapshots import snapshots
from fedorox.cli.system import system

@click.group()
@click.option("--config", "config_path", default=None, help="Path to the configuration file.")
@click.version_option(package_name="fedorox", prog_name="fedorox")
@click.pass_context
def main(ctx, config_path):
    """Fedorox CLI"""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path

main.add_command(mounts)
main.add_command(snapshots)
main.add_command(system)

@main.command()
@click.pass_context
def run(ctx):
    """Run the full provisioning sequence."""
    from fedorox.cli.utils import get_context
    from fedorox.orchestrator.steps import build_orchestrator, log_summary

    provision = get_context(ctx)
    result = build_orchestrator(provision).run()
    if result.exit_code:
        click.echo(f"Aborted: {result.aborted_reason}", err=True)
    else:
        log_summary(provision, result)
        click.echo("Please reboot your system to apply all changes.")
    ctx.exit(result.exit_code)

@main.command()
@click.pass_context
def preflight(ctx):
    """Check the btrfs subvolume layout of critical directories."""
    from fedorox.cli.utils import get_context
    from fedorox.errors import ProvisionAborted

    provision = get_context(ctx)
    try:
        results = provision.preflight().run()
    except ProvisionAborted as e:
        click.echo(f"Aborted: {e.reason}", err=True)
        ctx.exit(1)
    for r in results:
        click.echo(f"{r.path}: {'subvolume' if r.is_subvolume else 'not a subvolume'}")
