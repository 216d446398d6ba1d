"""Command line entry points for inspecting route sync results."""

from .sync_report import build_sync_report

__all__ = ["build_sync_report"]
