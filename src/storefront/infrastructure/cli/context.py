"""Per-invocation CLI state and the shared success/failure reporting."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

import click
import structlog

from storefront.application.response import ErrorCategory, Response
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import Settings

logger = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass
class CliContext:
    """What the top-level group resolved: caller identity, output mode, settings."""

    user_id: str | None
    as_json: bool
    settings: Settings


pass_cli = click.make_pass_decorator(CliContext)


def run_operation(
    cli: CliContext,
    operation: Callable[[], T],
    message: str | Callable[[T], str],
    render: Callable[[T], None],
) -> None:
    """Run one use case and report it.

    Text mode renders the result or raises ``click.ClickException``.  JSON
    mode prints the response envelope either way and exits 1 on failure.
    """
    try:
        result = operation()
    except DomainException as exc:
        _fail(cli, Response.fail(exc))
        return
    except Exception as exc:
        logger.exception("Unhandled error in CLI operation")
        _fail(cli, Response.fail(exc))
        return

    if cli.as_json:
        text = message(result) if callable(message) else message
        _echo_json(Response.ok(text, result).to_dict())
    else:
        render(result)


def _fail(cli: CliContext, response: Response) -> None:
    if cli.as_json:
        _echo_json(response.to_dict())
        raise click.exceptions.Exit(1)
    if response.category is ErrorCategory.INTERNAL:
        raise click.ClickException(f"{response.message}: {response.error}")
    raise click.ClickException(response.message)


def _echo_json(body: dict[str, Any]) -> None:
    click.echo(json.dumps(body, indent=2))
