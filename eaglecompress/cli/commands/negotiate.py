"""
Negotiation inspection commands.

Runs the same decision logic as the middleware against header values given
on the command line.
"""
from typing import List, Optional

import typer
from rich.table import Table

from eaglecompress.compression import Algorithm, Negotiator
from eaglecompress.core.exceptions import CompressionError
from ..utils import console, print_error, print_warning

app = typer.Typer(help="Inspect encoding negotiation")

@app.command("check")
def check(
    accept_encoding: Optional[str] = typer.Option(None, "--accept-encoding", "-a", help="Accept-Encoding request header"),
    content_type: Optional[str] = typer.Option(None, "--content-type", "-c", help="Content-Type response header"),
    compressible_type: Optional[List[str]] = typer.Option(None, "--type", "-t", help="Override pattern, repeatable"),
    algorithm: Optional[List[str]] = typer.Option(None, "--algorithm", help="Offered algorithm, repeatable"),
) -> None:
    """Show which algorithm and eligibility a request/response pair gets."""
    try:
        negotiator = Negotiator.from_patterns(
            patterns=compressible_type or None,
            algorithms=algorithm or None,
        )
    except CompressionError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    headers = {} if accept_encoding is None else {"accept-encoding": accept_encoding}
    if accept_encoding is None:
        print_warning("No Accept-Encoding given; the request is treated as not accepting compression")

    selected = negotiator.select_algorithm(headers)
    eligible = negotiator.is_eligible(content_type)
    compressed = selected is not Algorithm.NONE and eligible

    table = Table(title="Negotiation")
    table.add_column("Decision")
    table.add_column("Result")
    table.add_row("Algorithm", selected.token or "none")
    table.add_row("Content-Type eligible", "yes" if eligible else "no")
    table.add_row("Response compressed", "[green]yes[/green]" if compressed else "[red]no[/red]")
    console.print(table)

@app.command("rules")
def rules(
    compressible_type: Optional[List[str]] = typer.Option(None, "--type", "-t", help="Override pattern, repeatable"),
) -> None:
    """List the content-type eligibility rules in evaluation order."""
    try:
        negotiator = Negotiator.from_patterns(patterns=compressible_type or None)
    except CompressionError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    table = Table(title="Eligibility rules (first match wins)")
    table.add_column("#", justify="right")
    table.add_column("Pattern")
    table.add_column("Eligible")
    for index, rule in enumerate(negotiator.eligibility_rules, start=1):
        table.add_row(str(index), rule.pattern, "yes" if rule.eligible else "no")
    console.print(table)
