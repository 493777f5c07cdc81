"""estimate-spine CLI."""

from estimate_spine.cli.app import app

__all__ = ["app"]
