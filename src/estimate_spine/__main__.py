"""Allow ``python -m estimate_spine``."""

from estimate_spine.cli.app import app

app()
