"""
Server management commands.
"""
import sys
from pathlib import Path
from typing import Optional

import typer

from ..utils import print_error, print_info, print_success

# Create the command group
app = typer.Typer(help="Server management commands")

@app.command("run")
def run_server(
    app_path: str = typer.Argument("app.main:app", help="ASGI application import string"),
    host: Optional[str] = None,
    port: Optional[int] = None,
    reload: Optional[bool] = typer.Option(None, "--reload/--no-reload"),
    workers: Optional[int] = None,
) -> None:
    """Run an application with uvicorn. Unset options come from the settings."""
    # Import uvicorn only when needed
    import uvicorn
    from eaglecompress.core.config import get_settings

    settings = get_settings()
    host = host or settings.HOST
    port = port or settings.PORT
    reload = settings.RELOAD if reload is None else reload
    workers = workers or settings.WORKERS

    if ":" not in app_path:
        print_error(f"Invalid application path '{app_path}', expected 'module:attribute'")
        raise typer.Exit(code=1)

    # Make the project in the current directory importable
    cwd = Path.cwd()
    if str(cwd) not in sys.path:
        sys.path.insert(0, str(cwd))

    print_success(f"Starting {app_path} at http://{host}:{port}")
    uvicorn.run(
        app_path,
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        app_dir=str(cwd),
    )

@app.command("status")
def server_status() -> None:
    """Show the settings an application would start with."""
    from eaglecompress.core.config import get_settings

    settings = get_settings()
    print_info("Server status:")
    print_info(f"  Address: http://{settings.HOST}:{settings.PORT}")
    print_info(f"  Debug mode: {settings.DEBUG}")
    print_info(f"  Compression: {'enabled' if settings.COMPRESSION_ENABLED else 'disabled'}")
    print_info(f"  Algorithms: {', '.join(settings.COMPRESSION_ALGORITHMS) or 'none'}")
    print_info(f"  Level: {settings.COMPRESSION_LEVEL}")
    print_info(f"  Defer Content-Encoding: {settings.DEFER_ENCODING_HEADER}")
