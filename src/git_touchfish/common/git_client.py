"""
Git client for git-touchfish-commit

Reads commit timestamps and creates or amends commits with explicit
author/committer dates by shelling out to the git binary.
"""

import logging
import os
import subprocess
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from .errors import GitCommandError, NoCommitsError
from .log_utils import truncate_value

logger = logging.getLogger("git_touchfish.git")


def format_git_date(timestamp: datetime) -> str:
    """Render an aware datetime the way git accepts it in *_DATE variables"""
    if timestamp.tzinfo is None:
        timestamp = timestamp.astimezone()
    return timestamp.replace(microsecond=0).isoformat()


class GitClient:
    """Thin wrapper around the git CLI"""

    def __init__(self, working_dir: Optional[str] = None):
        """Initialize git client

        Args:
            working_dir: Working directory for git operations (defaults to current dir)
        """
        self.working_dir = working_dir or os.getcwd()

    def _run_git_command(
        self,
        args: List[str],
        env: Optional[Dict[str, str]] = None,
        capture: bool = True,
    ) -> subprocess.CompletedProcess:
        """Run git command in working directory

        Args:
            args: Arguments after ``git``
            env: Extra environment variables layered over os.environ
            capture: Capture stdout/stderr; when False git talks to the terminal

        Raises:
            GitCommandError: If git is missing or exits non-zero
        """
        full_env = None
        if env:
            full_env = os.environ.copy()
            full_env.update(env)

        logger.debug(f"Running: git {' '.join(args)}")
        try:
            return subprocess.run(
                ["git"] + args,
                cwd=self.working_dir,
                capture_output=capture,
                text=True,
                check=True,
                env=full_env,
            )
        except FileNotFoundError as e:
            raise GitCommandError("git executable not found in PATH") from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            logger.error(
                f"git {args[0]} failed ({e.returncode}): {truncate_value(stderr, 300)}"
            )
            message = f"git {args[0]} failed with exit code {e.returncode}"
            if stderr:
                message = f"{message}: {stderr}"
            raise GitCommandError(message, returncode=e.returncode, stderr=stderr) from e

    def _is_git_repo(self) -> bool:
        """Check if working directory is inside a git repository"""
        try:
            self._run_git_command(["rev-parse", "--git-dir"])
            return True
        except GitCommandError:
            return False

    def _commit_exists(self, ref: str) -> bool:
        try:
            self._run_git_command(["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"])
            return True
        except GitCommandError:
            return False

    def read_commit_time(self, ref: str = "HEAD") -> datetime:
        """Get the committer timestamp of a commit

        Raises:
            NoCommitsError: If ``ref`` does not name a commit
            GitCommandError: If not in a git repository
        """
        if not self._is_git_repo():
            raise GitCommandError(f"Not a git repository: {self.working_dir}")
        if not self._commit_exists(ref):
            raise NoCommitsError(f"No commit at {ref}")

        result = self._run_git_command(["log", "-1", "--format=%cI", ref])
        return datetime.fromisoformat(result.stdout.strip())

    def read_head_time(self) -> datetime:
        """Committer timestamp of HEAD"""
        return self.read_commit_time("HEAD")

    def read_parent_time(self) -> datetime:
        """Latest committer timestamp among all of HEAD's parents

        Raises:
            NoCommitsError: If there is no HEAD or HEAD is a root commit
            GitCommandError: If not in a git repository
        """
        if not self._is_git_repo():
            raise GitCommandError(f"Not a git repository: {self.working_dir}")
        if not self._commit_exists("HEAD"):
            raise NoCommitsError("No commit at HEAD")

        result = self._run_git_command(["log", "-1", "--format=%P", "HEAD"])
        parents = result.stdout.split()
        if not parents:
            raise NoCommitsError("HEAD is a root commit")

        result = self._run_git_command(["log", "--no-walk", "--format=%cI"] + parents)
        return max(datetime.fromisoformat(line) for line in result.stdout.split())

    def _date_env(self, timestamp: datetime) -> Dict[str, str]:
        git_date = format_git_date(timestamp)
        return {"GIT_AUTHOR_DATE": git_date, "GIT_COMMITTER_DATE": git_date}

    def commit(self, args: Sequence[str], timestamp: datetime) -> None:
        """Run ``git commit`` with the user's arguments and a fixed date

        Output is not captured so editors and hooks keep working.
        """
        logger.info(f"Committing at {format_git_date(timestamp)} with args {list(args)}")
        self._run_git_command(
            ["commit"] + list(args), env=self._date_env(timestamp), capture=False
        )

    def amend(self, timestamp: datetime, args: Sequence[str] = ()) -> None:
        """Re-date the last commit, forwarding any extra ``git commit`` args

        Without extra args only the dates change.
        """
        if not args:
            self.apply_timestamp("HEAD", timestamp)
            return

        git_date = format_git_date(timestamp)
        logger.info(f"Amending HEAD at {git_date} with args {list(args)}")
        # An amended commit keeps its author date unless --date is given
        self._run_git_command(
            ["commit", "--amend", "--no-edit", f"--date={git_date}"] + list(args),
            env=self._date_env(timestamp),
            capture=False,
        )

    def apply_timestamp(self, commit_ref: str, timestamp: datetime) -> None:
        """Set author and committer date of ``commit_ref`` in place

        Tree, message, parents and author identity are preserved. Only HEAD
        can be rewritten; staged changes are left out of the commit.
        """
        if commit_ref != "HEAD":
            raise GitCommandError(
                f"Only HEAD can be re-dated in place, got {commit_ref!r}"
            )
        if not self._commit_exists("HEAD"):
            raise NoCommitsError("No commit to amend: the repository has no commits")

        git_date = format_git_date(timestamp)
        logger.info(f"Re-dating HEAD to {git_date}")
        self._run_git_command(
            [
                "commit",
                "--amend",
                "--only",
                "--no-edit",
                "--allow-empty",
                "--no-verify",
                f"--date={git_date}",
            ],
            env=self._date_env(timestamp),
        )
