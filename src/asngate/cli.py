"""Command-line interface for ASN lookups and admission checks."""

import logging
from pathlib import Path

import typer

from asngate.config import load_config
from asngate.core.address import parse_client_address
from asngate.core.asn_matcher import ASNMatcher
from asngate.errors import (
    AddressParseError,
    ConfigError,
    DatabaseOpenError,
    LookupFailedError,
)
from asngate.resolver.maxmind_resolver import MaxMindASNResolver

app = typer.Typer(help="Resolve client addresses to ASNs and check them against an ASO policy.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def lookup(
    address: str = typer.Argument(..., help="IP address, optionally with :port."),
    db: Path = typer.Option(..., "--db", help="Path to the MaxMind ASN database."),
) -> None:
    """Print the ASN record for an address."""
    try:
        resolver = MaxMindASNResolver(db)
    except DatabaseOpenError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=2) from None

    try:
        record = resolver.lookup(parse_client_address(address))
    except (AddressParseError, LookupFailedError) as e:
        typer.echo(f"{address}: {e}", err=True)
        raise typer.Exit(code=1) from None
    finally:
        resolver.close()

    if record is None:
        typer.echo("no record")
    else:
        typer.echo(f"AS{record.number} {record.organization}")


@app.command()
def check(
    address: str = typer.Argument(..., help="IP address, optionally with :port."),
    config: Path = typer.Option(..., "--config", "-c", help="Matcher config (.json or block syntax)."),
) -> None:
    """Check whether an address is admitted. Exit code 0 = allowed, 1 = denied."""
    try:
        matcher = ASNMatcher.provision(load_config(config))
    except (ConfigError, DatabaseOpenError) as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=2) from None

    try:
        allowed = matcher.matches(address)
    finally:
        matcher.close()

    typer.echo("allowed" if allowed else "denied")
    if not allowed:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
