"""
Main CLI command registration.

This module sets up the main CLI command group and registers all subcommands.
"""
import typer

# Create the main command group
app = typer.Typer(help="Eagle Compress CLI")

@app.callback()
def main_callback():
    """Eagle Compress command line interface."""
    pass

from . import negotiate as negotiate_module
app.add_typer(negotiate_module.app, name="negotiate", help="Inspect encoding negotiation")

from . import server as server_module
app.add_typer(server_module.app, name="server", help="Server management commands")

__all__ = ['app']
