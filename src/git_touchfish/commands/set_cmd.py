"""Set command for git-tc"""

import click

from git_touchfish.core import Touchfish


@click.command(name="set")
@click.argument("start")
@click.argument("end")
def set_window(start: str, end: str) -> None:
    """Store the daily window, e.g. `git tc set 09:00 17:00`

    Times are 24-hour HH:MM and START must be earlier than END.
    """
    Touchfish().set_window(start, end)
