"""Amend command for git-tc"""

from typing import Tuple

import click

from git_touchfish.core import Touchfish


@click.command(
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
    add_help_option=False,
)
@click.argument("git_args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def amend(ctx: click.Context, git_args: Tuple[str, ...]) -> None:
    """Move the last commit to a random time in the window

    Any extra arguments are passed on to `git commit --amend`.
    """
    roll_over = (ctx.obj or {}).get("roll_over", False)
    Touchfish(roll_over=roll_over).amend(git_args)
