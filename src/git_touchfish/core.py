"""
git-touchfish-commit core - one commit or amend with a randomized timestamp
"""

import logging
import random
from datetime import date, datetime
from typing import Optional, Sequence

from rich.console import Console

from git_touchfish.common.config_store import ConfigStore, TimeWindow
from git_touchfish.common.errors import NoCommitsError
from git_touchfish.common.git_client import GitClient, format_git_date
from git_touchfish.common.timestamp import generate

logger = logging.getLogger("git_touchfish.core")


class Touchfish:
    """Wires the config store, git client and generator together"""

    def __init__(
        self,
        config_store: Optional[ConfigStore] = None,
        git_client: Optional[GitClient] = None,
        console: Optional[Console] = None,
        rng: Optional[random.Random] = None,
        roll_over: bool = False,
    ) -> None:
        self.config_store = config_store or ConfigStore()
        self.git = git_client or GitClient()
        self.console = console or Console()
        self.rng = rng
        self.roll_over = roll_over

    def set_window(self, start: str, end: str) -> TimeWindow:
        window = self.config_store.set(start, end)
        self.console.print(f"[green]Time window set to[/green] [bold]{window}[/bold]")
        return window

    def show_window(self) -> TimeWindow:
        window = self.config_store.show()
        self.console.print(f"Current time window: [bold]{window}[/bold]")
        return window

    def _lower_bound(self, amending: bool) -> Optional[datetime]:
        """Timestamp the new commit must come after, or None

        An amended commit replaces HEAD, so it is bounded by HEAD's parents.
        """
        try:
            if amending:
                return self.git.read_parent_time()
            return self.git.read_head_time()
        except NoCommitsError:
            logger.info("No previous commit to bound against, using window start")
            return None

    def next_timestamp(self, amending: bool = False, today: Optional[date] = None) -> datetime:
        """Generate the timestamp for the commit about to be written"""
        window = self.config_store.show()
        lower_bound = self._lower_bound(amending)
        return generate(
            window,
            lower_bound,
            today or date.today(),
            rng=self.rng,
            roll_over=self.roll_over,
        )

    def commit(self, args: Sequence[str], today: Optional[date] = None) -> datetime:
        """Forward ``args`` to git commit using a random timestamp"""
        timestamp = self.next_timestamp(amending=False, today=today)
        self.console.print(
            f"Running git commit at random time [cyan]{format_git_date(timestamp)}[/cyan]..."
        )
        self.git.commit(args, timestamp)
        self.console.print("[bold green]git commit succeeded.[/bold green]")
        return timestamp

    def amend(self, args: Sequence[str] = (), today: Optional[date] = None) -> datetime:
        """Re-date the last commit with a random timestamp"""
        timestamp = self.next_timestamp(amending=True, today=today)
        self.console.print(
            f"Amending last commit to random time [cyan]{format_git_date(timestamp)}[/cyan]..."
        )
        self.git.amend(timestamp, args)
        self.console.print("[bold green]amend succeeded.[/bold green]")
        return timestamp
