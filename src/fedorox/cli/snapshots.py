import click

@click.group()
def snapshots():
    """Manage snapper snapshots."""
    pass

@snapshots.command(name="setup")
@click.pass_context
def setup_snapshots(ctx):
    """Install snapper, create configs and take the initial snapshots."""
    from fedorox.cli.utils import get_context
    provision = get_context(ctx)
    if not provision.snapshots().setup_snapshots():
        ctx.exit(1)

@snapshots.command(name="create")
@click.argument("subject", type=click.Choice(["root", "home"]))
@click.option("--label", default="Manual", help="Label appended to the timestamp.")
@click.pass_context
def create_snapshot(ctx, subject, label):
    """Take a snapshot of SUBJECT."""
    from fedorox.cli.utils import get_context
    from fedorox.snapshots.models import SnapshotSubject
    provision = get_context(ctx)
    snapshot = provision.snapshots().snapshot_subject(SnapshotSubject(subject), label=label)
    if snapshot is None:
        ctx.exit(1)
    click.echo(f"Snapshot created: {subject}-{snapshot.description}")
