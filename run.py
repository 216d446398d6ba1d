#!/usr/bin/env python3
"""Convenience runner for the route sync report tool.

Usage:
    python run.py routes.json [--now 2025-03-05T12:00:00Z]
"""
import logging
from route_sync.tools.sync_report import main

if __name__ == "__main__":
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s %(name)s: %(message)s")
    raise SystemExit(main())
