"""Allows running the CLI with ``python -m eaglecompress.cli``."""
from . import app

app(prog_name="eaglecompress")
