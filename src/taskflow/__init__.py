"""taskflow — task board state manager with board, calendar, dashboard and table views."""

from taskflow.config import VERSION

__version__ = VERSION
