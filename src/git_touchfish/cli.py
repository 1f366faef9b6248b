#!/usr/bin/env python3
"""
git-tc - commit at a random time inside your configured daily window
"""

from typing import Any, List, Optional, Tuple

import click
from rich.console import Console
from rich.markup import escape

from git_touchfish import __version__
from git_touchfish.commands.amend import amend
from git_touchfish.commands.commit import commit
from git_touchfish.commands.set_cmd import set_window
from git_touchfish.commands.show import show
from git_touchfish.common.config_store import default_app_dir
from git_touchfish.common.errors import TouchfishError
from git_touchfish.common.log_utils import setup_logger

console = Console()
err_console = Console(stderr=True)

LOG_FILENAME = "git-tc.log"


class PassThroughGroup(click.Group):
    """Command group that hands unknown verbs and options to `commit`"""

    default_command = "commit"

    def parse_args(self, ctx: click.Context, args: List[str]) -> List[str]:
        # Group options only count before the first token that is not one;
        # everything after belongs to the subcommand, even `--version`.
        group_opts = set()
        for param in self.get_params(ctx):
            group_opts.update(param.opts)

        split = 0
        while split < len(args) and args[split] in group_opts:
            split += 1
        if split < len(args):
            args = args[:split] + ["--"] + args[split:]
        return super().parse_args(ctx, args)

    def resolve_command(
        self, ctx: click.Context, args: List[str]
    ) -> Tuple[Optional[str], Optional[click.Command], List[str]]:
        if self.get_command(ctx, args[0]) is None:
            return self.default_command, self.get_command(ctx, self.default_command), args
        return super().resolve_command(ctx, args)

    def invoke(self, ctx: click.Context) -> Any:
        try:
            return super().invoke(ctx)
        except TouchfishError as e:
            err_console.print(f"[bold red]Error:[/bold red] {escape(e.message)}")
            ctx.exit(e.exit_code)


def _configure_logging() -> None:
    app_dir = default_app_dir()
    app_dir.mkdir(parents=True, exist_ok=True)
    setup_logger("git_touchfish", str(app_dir / LOG_FILENAME))


@click.group(
    cls=PassThroughGroup,
    invoke_without_command=True,
    context_settings={
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
    },
)
@click.version_option(version=__version__, prog_name="git-tc")
@click.option(
    "--roll-over",
    is_flag=True,
    help="When today's window is used up, take the next day's window instead of failing",
)
@click.pass_context
def cli(ctx: click.Context, roll_over: bool) -> None:
    """Commit with a random timestamp inside a daily time window

    \b
    Usage:
      git tc set <start> <end>   store the window (HH:MM HH:MM)
      git tc show                print the window
      git tc amend [args...]     re-date the last commit
      git tc [args...]           git commit [args...] at a random time
    """
    ctx.ensure_object(dict)
    ctx.obj["roll_over"] = roll_over
    _configure_logging()

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(set_window)
cli.add_command(show)
cli.add_command(amend)
cli.add_command(commit)


def main() -> None:
    """Main entry point for the CLI"""
    try:
        cli()
    except Exception as e:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise


if __name__ == "__main__":
    main()
