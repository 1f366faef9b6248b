"""Pass-through commit command for git-tc"""

from typing import Tuple

import click

from git_touchfish.core import Touchfish


@click.command(
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
    add_help_option=False,
)
@click.argument("git_args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def commit(ctx: click.Context, git_args: Tuple[str, ...]) -> None:
    """Run `git commit` with the given arguments at a random time"""
    roll_over = (ctx.obj or {}).get("roll_over", False)
    Touchfish(roll_over=roll_over).commit(git_args)
