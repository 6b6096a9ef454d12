"""vcf-allele-codec: inspect and validate VCF genotype allele tokens."""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import CodecConfig, ConfigValidationError, load_config
from .encoding import AlleleToken, parse_allele
from .utils.validators import InvalidEncodingError

logger = logging.getLogger(__name__)


def version_callback(value: bool) -> None:
    if value:
        print(__version__)
        raise typer.Exit()


app = typer.Typer(
    name="vcf-allele-codec", help="Parse and validate VCF genotype allele tokens"
)
console = Console()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None, "--version", callback=version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    pass


def setup_logging(verbose: bool, quiet: bool, default_level: str = "INFO") -> None:
    """Configure logging based on verbosity flags."""
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, default_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger("vcf_allele_codec").setLevel(level)


def _resolve_config(config_path: Path | None) -> CodecConfig:
    if config_path is None:
        return CodecConfig()
    try:
        return load_config(config_path)
    except (FileNotFoundError, ConfigValidationError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from None


def _read_tokens(path: Path) -> list[str]:
    """Read one token per line, skipping blank lines and # comments."""
    tokens = []
    with open(path, encoding="utf-8") as f:
        for line in f:
            token = line.strip()
            if token and not token.startswith("#"):
                tokens.append(token)
    return tokens


def _parse_all(
    tokens: list[str], allow_multi_base_reference: bool
) -> tuple[list[tuple[str, AlleleToken]], list[tuple[str, InvalidEncodingError]]]:
    parsed = []
    errors = []
    for raw in tokens:
        try:
            parsed.append((raw, parse_allele(raw, allow_multi_base_reference)))
        except InvalidEncodingError as e:
            logger.debug("Rejected allele token '%s' (%s)", raw, e.rule.value)
            errors.append((raw, e))
    return parsed, errors


@app.command()
def parse(
    tokens: list[str] = typer.Argument(..., help="Allele tokens to parse (e.g. A . D5 IACGT)"),
    allow_multi_base_reference: bool | None = typer.Option(
        None,
        "--allow-multi-base-reference/--strict",
        help="Accept unrecognized multi-character tokens as MIXED",
    ),
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help="TOML configuration file"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log warnings and errors"),
) -> None:
    """Parse allele tokens and show their kind, bases, length and canonical form."""
    config = _resolve_config(config_path)
    setup_logging(verbose, quiet, config.log_level)
    if allow_multi_base_reference is None:
        allow_multi_base_reference = config.allow_multi_base_reference

    parsed, errors = _parse_all(tokens, allow_multi_base_reference)

    if parsed:
        table = Table(title="Allele tokens")
        table.add_column("Token")
        table.add_column("Kind")
        table.add_column("Bases")
        table.add_column("Length", justify="right")
        table.add_column("Canonical")
        for raw, token in parsed:
            table.add_row(
                escape(raw),
                token.kind.name,
                escape(token.bases),
                str(token.length),
                escape(token.render()),
            )
        console.print(table)

    for raw, error in errors:
        console.print(f"[red]Error: {escape(str(error))}[/red]")

    if errors:
        raise typer.Exit(1)


@app.command()
def validate(
    tokens: list[str] | None = typer.Argument(None, help="Allele tokens to validate"),
    token_file: Path | None = typer.Option(
        None, "--file", "-f", help="File with one allele token per line"
    ),
    allow_multi_base_reference: bool | None = typer.Option(
        None,
        "--allow-multi-base-reference/--strict",
        help="Accept unrecognized multi-character tokens as MIXED",
    ),
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help="TOML configuration file"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log warnings and errors"),
) -> None:
    """Validate allele tokens from arguments and/or a file."""
    config = _resolve_config(config_path)
    setup_logging(verbose, quiet, config.log_level)
    if allow_multi_base_reference is None:
        allow_multi_base_reference = config.allow_multi_base_reference

    all_tokens = list(tokens or [])
    if token_file is not None:
        if not token_file.exists():
            console.print(f"[red]Error: Token file not found: {escape(str(token_file))}[/red]")
            raise typer.Exit(1)
        try:
            all_tokens.extend(_read_tokens(token_file))
        except (OSError, UnicodeDecodeError) as e:
            console.print(
                f"[red]Error: Cannot read token file {escape(str(token_file))}: "
                f"{escape(str(e))}[/red]"
            )
            raise typer.Exit(1) from None

    if not all_tokens:
        console.print("[red]Error: No allele tokens to validate[/red]")
        raise typer.Exit(1)

    logger.info("Validating %d allele tokens", len(all_tokens))
    parsed, errors = _parse_all(all_tokens, allow_multi_base_reference)

    for raw, error in errors:
        console.print(f"[red]✗ {escape(raw)}: {escape(str(error))}[/red]")

    console.print(f"Valid: {len(parsed)}")
    console.print(f"Invalid: {len(errors)}")

    if errors:
        console.print("[red]✗ Validation failed[/red]")
        raise typer.Exit(1)
    console.print("[green]✓ Validation passed[/green]")


if __name__ == "__main__":
    app()
