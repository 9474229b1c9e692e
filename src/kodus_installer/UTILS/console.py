"""
Operator-facing progress output.
"""
from contextlib import contextmanager
from typing import Iterator, Sequence

import click


def section(title: str) -> None:
    click.secho(f"\n{title}", fg="blue")


def succeed(message: str) -> None:
    click.secho(f"✔ {message}", fg="green")


def fail(message: str) -> None:
    click.secho(f"✖ {message}", fg="red", err=True)


def warn(message: str) -> None:
    click.secho(message, fg="yellow")


def info(message: str) -> None:
    click.echo(message)


def hints(lines: Sequence[str]) -> None:
    """
    Prints a numbered troubleshooting checklist to stderr.
    """
    if not lines:
        return
    click.secho("\nTroubleshooting steps:", fg="yellow", err=True)
    for number, line in enumerate(lines, start=1):
        click.echo(f"{number}. {line}", err=True)


@contextmanager
def step(message: str, done: str) -> Iterator[None]:
    """
    Announces a step, then prints ``done`` if the block finishes without raising.

    On an exception the step is marked as failed and the exception propagates.
    """
    click.echo(f"… {message}")
    try:
        yield
    except BaseException:
        fail(f"{message} failed")
        raise
    succeed(done)
