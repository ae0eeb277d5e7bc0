import click
import yaml

from fedorox.config.logging import configure_logging
from fedorox.config.settings import ProvisionConfig
from fedorox.orchestrator.steps import ProvisionContext, build_context
from fedorox.prompts import ClickPrompter


def load_config(config_path=None) -> ProvisionConfig:
    try:
        return ProvisionConfig.load(config_path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise click.ClickException(f"Invalid configuration: {e}")


def get_context(ctx: click.Context) -> ProvisionContext:
    """Build the run context once per invocation and cache it on the click context."""
    if "provision" not in ctx.obj:
        config = load_config(ctx.obj.get("config_path"))
        configure_logging(config.log_file, owner=config.actual_user)
        ctx.obj["provision"] = build_context(config, ClickPrompter())
    return ctx.obj["provision"]
