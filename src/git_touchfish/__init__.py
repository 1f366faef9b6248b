"""
git-touchfish-commit

Wraps `git commit` so new commits land at a random time inside a configured
daily window, always after the commit they follow.
"""

__version__ = "0.1.0"
