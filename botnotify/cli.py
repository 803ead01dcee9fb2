"""Click CLI for sending a chat-bot webhook notification.

Every option can also come from the environment, using the variable names
the GitHub Actions runner sets for action inputs (``INPUT_<NAME>``).
"""

from __future__ import annotations

import asyncio
import logging
import os

import click

from botnotify.client import NotifyClient
from botnotify.delivery.dispatcher import Dispatcher
from botnotify.errors import NotifyError
from botnotify.models import InvocationConfig, Provider
from botnotify.template.github import DEFAULT_API_URL


def _write_output(name: str, value: str) -> None:
    output_path = os.environ.get("GITHUB_OUTPUT")
    if not output_path:
        return
    with open(output_path, "a") as f:
        f.write(f"{name}={value}\n")


def _report_failure(message: str) -> None:
    if os.environ.get("GITHUB_ACTIONS") == "true":
        # Annotations are single-line; newlines must be escaped.
        click.echo("::error::" + message.replace("%", "%25").replace("\n", "%0A"))


@click.command()
@click.option("--app", envvar="INPUT_APP", required=True,
              help=f"Chat provider: {', '.join(p.value for p in Provider)}.")
@click.option("--webhook", envvar="INPUT_WEBHOOK", required=True, help="Bot webhook URL.")
@click.option("--secret", envvar="INPUT_SECRET", default=None, help="Signing secret.")
@click.option("--template", envvar="INPUT_TEMPLATE", required=True,
              help="Literal JSON payload, or file://<path> in the repository.")
@click.option("--params", envvar="INPUT_PARAMS", default=None,
              help="JSON object of placeholder values for a file template.")
@click.option("--github-token", envvar=["INPUT_GITHUB-TOKEN", "INPUT_GITHUB_TOKEN"], default=None,
              help="Token used to read a file template from the repository.")
@click.option("--branch", envvar="INPUT_BRANCH", default=None,
              help="Branch or revision of a file template (default: main).")
@click.option("--repository", envvar="GITHUB_REPOSITORY", default=None,
              help="owner/repo holding file templates.")
@click.option("--api-url", envvar="GITHUB_API_URL", default=DEFAULT_API_URL, show_default=True,
              help="GitHub API base URL.")
@click.option("--timeout", envvar="BOTNOTIFY_TIMEOUT", type=float, default=30.0, show_default=True,
              help="HTTP timeout in seconds.")
@click.option("--log-level", envvar="BOTNOTIFY_LOG_LEVEL", default="WARNING", show_default=True,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False))
def cli(
    app: str,
    webhook: str,
    secret: str | None,
    template: str,
    params: str | None,
    github_token: str | None,
    branch: str | None,
    repository: str | None,
    api_url: str,
    timeout: float,
    log_level: str,
) -> None:
    """Send a signed notification to a DingTalk or Lark bot webhook."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = InvocationConfig(
        app=app,
        webhook=webhook,
        secret=secret,
        template=template,
        params=params,
        github_token=github_token,
        branch=branch,
        repository=repository,
        api_url=api_url,
        timeout=timeout,
    )

    try:
        response = asyncio.run(_notify(config))
    except NotifyError as e:
        _report_failure(str(e))
        raise click.ClickException(str(e)) from e

    click.echo(response)
    _write_output("response", response)


async def _notify(config: InvocationConfig) -> str:
    client = await NotifyClient.from_config(config, dispatcher=Dispatcher(timeout=config.timeout))
    return await client.notify()


if __name__ == "__main__":
    cli()
