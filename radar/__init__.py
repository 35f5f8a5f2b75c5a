"""Search Radar -- keyword opportunity intelligence for the Greater Austin sites."""

__version__ = "1.0.0"
