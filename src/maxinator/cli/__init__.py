"""CLI commands for Maxinator."""

import json
import sys

import click

from ..bot import Bot
from ..client import MaxClient
from ..exceptions import MaxError
from ..logging import setup_logging, get_logger
from ..miniapp import MiniApp

logger = get_logger(__name__)


def _echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _bot(ctx) -> Bot:
    return Bot(ctx.obj["token"], base_url=ctx.obj["base_url"])


def _run(ctx, call) -> None:
    """Run an API call, printing the JSON result or the error."""
    try:
        _echo_json(call(_bot(ctx)))
    except MaxError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.option('--token', envvar='MAX_BOT_TOKEN', help='Bot access token.')
@click.option('--base-url', envvar='MAX_API_URL', default=MaxClient.DEFAULT_URL, show_default=True)
@click.pass_context
def cli(ctx, token, base_url):
    """Maxinator - command line client for the Max Bot API."""
    ctx.ensure_object(dict)
    ctx.obj["token"] = token
    ctx.obj["base_url"] = base_url
    setup_logging(secrets=[token] if token else None)


@cli.command()
@click.pass_context
def me(ctx):
    """Show information about the bot."""
    _run(ctx, lambda bot: bot.get_bot_info())


@cli.command()
@click.argument('chat_id')
@click.argument('text')
@click.option('--format', 'text_format', type=click.Choice(['markdown', 'html'], case_sensitive=False))
@click.pass_context
def send(ctx, chat_id, text, text_format):
    """Send TEXT to CHAT_ID."""
    params = {"format": text_format} if text_format else {}
    _run(ctx, lambda bot: bot.send_message(chat_id, text, **params))


@cli.command()
@click.option('--count', type=int, default=None, help='Number of chats to return.')
@click.pass_context
def chats(ctx, count):
    """List group chats the bot belongs to."""
    params = {"count": count} if count else {}
    _run(ctx, lambda bot: bot.get_chats(**params))


@cli.command()
@click.pass_context
def subscriptions(ctx):
    """List webhook subscriptions."""
    _run(ctx, lambda bot: bot.get_subscriptions())


@cli.command()
@click.argument('url')
@click.pass_context
def subscribe(ctx, url):
    """Set a webhook at URL."""
    _run(ctx, lambda bot: bot.subscribe(url))


@cli.command()
@click.argument('url', required=False)
@click.pass_context
def unsubscribe(ctx, url):
    """Remove the webhook (optionally only the one at URL)."""
    _run(ctx, lambda bot: bot.unsubscribe(url))


@cli.command('verify-launch-params')
@click.argument('params')
@click.option('--secret-key', envvar='MAX_SECRET_KEY', required=True, help='Mini app secret key.')
def verify_launch_params(params, secret_key):
    """Verify the signature of mini app launch PARAMS."""
    try:
        mini_app = MiniApp(secret_key)
    except MaxError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if not mini_app.validate_params(params):
        click.echo("invalid")
        sys.exit(1)

    click.echo("valid")
    user_id = mini_app.get_user_id(params)
    if user_id is not None:
        click.echo(f"user_id: {user_id}")


if __name__ == "__main__":
    cli()
