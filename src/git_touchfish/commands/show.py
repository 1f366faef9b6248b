"""Show command for git-tc"""

import click

from git_touchfish.core import Touchfish


@click.command()
def show() -> None:
    """Print the configured daily window"""
    Touchfish().show_window()
