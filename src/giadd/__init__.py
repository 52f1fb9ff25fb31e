"""giadd: stage files in git using an interactive selector."""

__version__ = "0.1.0"
