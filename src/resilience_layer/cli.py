"""CLI interface for the resilience layer"""

import asyncio
from typing import Optional

import click

from resilience_layer.config import settings
from resilience_layer.interaction import ConsoleConfirmer, StaticConfirmer
from resilience_layer.llm.model_check import get_effective_model
from resilience_layer.logging_config import configure_logging


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose (DEBUG) logging")
@click.pass_context
def cli(ctx, verbose: bool):
    """Resilience Layer - retry and model fallback for rate-limited model APIs"""
    ctx.ensure_object(dict)
    configure_logging("DEBUG" if verbose else settings.LOG_LEVEL, settings.ENVIRONMENT)
    ctx.obj["verbose"] = verbose


@cli.command("check-model")
@click.option("--model", "model", default=None, help="Configured model (default: DEFAULT_MODEL)")
@click.option(
    "--api-key",
    envvar="GEMINI_API_KEY",
    required=True,
    help="API key for the probe request (or GEMINI_API_KEY)",
)
@click.option(
    "--assume",
    type=click.Choice(["yes", "no"]),
    default=None,
    help="Answer the switch prompt non-interactively",
)
def check_model(model: Optional[str], api_key: str, assume: Optional[str]):
    """Print the model to use for this session.

    Probes the default model and, if it is rate-limited, offers the
    fallback model.
    """
    if assume is None:
        confirmer = ConsoleConfirmer()
    else:
        confirmer = StaticConfirmer(answer=assume == "yes", echo=True)

    effective = asyncio.run(
        get_effective_model(api_key, model or settings.DEFAULT_MODEL, confirmer=confirmer)
    )
    click.echo(effective)


def main():
    """Main entry point"""
    cli(obj={})


if __name__ == "__main__":
    main()
