#!/usr/bin/env python3
"""
pheno_convert.cli.cli

Typer-based CLI converting clinical/phenotypic data between Phenopacket,
Beacon v2 and REDCap representations.

Examples
--------
Phenopacket to Beacon v2 individuals:

    pheno-convert --ipxf phenopackets.json --obff individuals.json -o out/

REDCap export to Phenopackets:

    pheno-convert --iredcap export.csv --redcap-dictionary dictionary.csv \\
        --opxf phenopackets.json
"""

from __future__ import annotations

import logging
import traceback
from pathlib import Path

import typer

from pheno_convert import __version__
from pheno_convert.application.options import ConversionOptions, RequestFlags
from pheno_convert.cli.presenter import Presenter
from pheno_convert.errors import PhenoConvertError

app = typer.Typer(
    name="pheno-convert",
    help="Convert clinical data between Phenopacket, Beacon v2 and REDCap.",
    add_completion=False,
)

INPUT_PANEL = "Input"
OUTPUT_PANEL = "Output"
ENGINE_PANEL = "Engine"

MANUAL = """\
pheno-convert reads one input document and writes one converted document.

Input (exactly one):
  --ipxf FILE       Phenopacket v2 (JSON or YAML)
  --ibff FILE       Beacon v2 individuals (JSON or YAML)
  --iredcap FILE    REDCap export (CSV), requires --redcap-dictionary

Output (at most one, default: Beacon v2 'individuals.json'):
  --opxf NAME       Phenopacket v2 file name inside --out-dir
  --obff NAME       Beacon v2 file name inside --out-dir

Files ending in .yaml/.yml are written as YAML, anything else as JSON.
The output directory must already exist; the file is replaced atomically.

When several input selectors are given the first of --ipxf, --ibff,
--iredcap wins. Use --strict to reject such calls instead.

Exit status: 0 success, 1 validation or conversion failure, 2 bad usage.
"""

_LOG_HANDLER_MARK = "_pheno_convert_cli"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"pheno-convert {__version__}")
        raise typer.Exit()


def _man_callback(value: bool) -> None:
    if value:
        typer.echo(MANUAL, nl=False)
        raise typer.Exit()


def _configure_logging(verbose: bool, debug: int) -> None:
    """Attach a stderr handler to the package logger for this invocation."""
    if debug > 0:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logger = logging.getLogger("pheno_convert")
    for handler in list(logger.handlers):
        if getattr(handler, _LOG_HANDLER_MARK, False):
            logger.removeHandler(handler)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    setattr(handler, _LOG_HANDLER_MARK, True)
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


def _print_conversion_error(exc: Exception, debug: int, presenter: Presenter) -> int:
    """Print a user-friendly conversion error.

    Parameters
    ----------
    exc : Exception
        Exception raised while building or running the conversion.
    debug : int
        Debug level; any positive value adds the traceback.
    presenter : Presenter
        Output renderer.

    Returns
    -------
    int
        Process exit code.
    """
    presenter.error(type(exc).__name__, str(exc))
    if debug > 0:
        presenter.detail("\nTraceback:")
        presenter.detail(
            "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        )
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _coerce_option_value(raw: str) -> object:
    """Best-effort coercion for CLI key/value options."""
    lowered = raw.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    try:
        if "." in raw:
            return float(raw)
        return int(raw)
    except ValueError:
        return raw


def _parse_engine_options(option_items: list[str] | None) -> dict[str, object]:
    """Parse repeatable KEY=VALUE options forwarded to the engine."""
    parsed: dict[str, object] = {}
    for item in option_items or []:
        if "=" not in item:
            raise typer.BadParameter(
                f"Invalid option entry '{item}'. Use KEY=VALUE format.",
                param_hint="'--option'",
            )
        key, raw_value = item.split("=", 1)
        key = key.strip()
        if not key:
            raise typer.BadParameter(
                "Option key cannot be empty.", param_hint="'--option'"
            )
        parsed[key] = _coerce_option_value(raw_value)
    return parsed


def _path_arg(value: Path | None) -> str | None:
    return None if value is None else str(value)


@app.command()
def convert_cmd(
    ipxf: Path | None = typer.Option(
        None,
        "--ipxf",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Phenopacket input file (JSON/YAML).",
        rich_help_panel=INPUT_PANEL,
    ),
    ibff: Path | None = typer.Option(
        None,
        "--ibff",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Beacon v2 individuals input file (JSON/YAML).",
        rich_help_panel=INPUT_PANEL,
    ),
    iredcap: Path | None = typer.Option(
        None,
        "--iredcap",
        exists=True,
        dir_okay=False,
        readable=True,
        help="REDCap export file (CSV).",
        rich_help_panel=INPUT_PANEL,
    ),
    redcap_dictionary: Path | None = typer.Option(
        None,
        "--redcap-dictionary",
        "--rcd",
        exists=True,
        dir_okay=False,
        readable=True,
        help="REDCap data dictionary (required with --iredcap).",
        rich_help_panel=INPUT_PANEL,
    ),
    opxf: str | None = typer.Option(
        None,
        "--opxf",
        help="Phenopacket output file name.",
        rich_help_panel=OUTPUT_PANEL,
    ),
    obff: str | None = typer.Option(
        None,
        "--obff",
        help="Beacon v2 output file name (default output: individuals.json).",
        rich_help_panel=OUTPUT_PANEL,
    ),
    out_dir: Path = typer.Option(
        Path("."),
        "--out-dir",
        "-o",
        help="Existing directory receiving the output file.",
        rich_help_panel=OUTPUT_PANEL,
    ),
    print_hidden_labels: bool = typer.Option(
        False,
        "--print-hidden-labels",
        help="Keep original (pre-mapping) values in the output.",
    ),
    option: list[str] | None = typer.Option(
        None,
        "--option",
        help="Engine option KEY=VALUE (repeatable).",
        rich_help_panel=ENGINE_PANEL,
    ),
    engine: str = typer.Option(
        "builtin",
        "--engine",
        help="Name of the conversion engine to use.",
        rich_help_panel=ENGINE_PANEL,
    ),
    engine_module: list[str] | None = typer.Option(
        None,
        "--engine-module",
        help="Engine module import path or file path (repeatable).",
        rich_help_panel=ENGINE_PANEL,
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Fail when more than one input or output selector is given.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging."),
    debug: int = typer.Option(
        0, "--debug", min=0, max=5, help="Debug level (0-5); >0 shows tracebacks."
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output."),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
    man: bool = typer.Option(
        False,
        "--man",
        callback=_man_callback,
        is_eager=True,
        help="Show the full manual and exit.",
    ),
) -> None:
    """Convert one clinical data document to another data model.

    Parameters
    ----------
    ipxf, ibff, iredcap : Path | None
        Input selectors; the first present one wins unless ``--strict``.
    redcap_dictionary : Path | None
        REDCap data dictionary.
    opxf, obff : str | None
        Output selectors carrying the output file name.
    out_dir : Path
        Directory receiving the output file; must exist.

    Notes
    -----
    - Auxiliary flags are forwarded unchanged to the engine.
    - Colors are controlled by ``--no-color`` through the presenter only.
    """
    del version, man
    presenter = Presenter(color=not no_color)
    _configure_logging(verbose, debug)

    extra = _parse_engine_options(option)
    flags = RequestFlags(
        ipxf=_path_arg(ipxf),
        ibff=_path_arg(ibff),
        iredcap=_path_arg(iredcap),
        opxf=opxf,
        obff=obff,
        out_dir=out_dir,
        dictionary=_path_arg(redcap_dictionary),
        options=ConversionOptions(
            print_hidden_labels=print_hidden_labels,
            verbose=verbose,
            debug=debug,
            extra=extra,
        ),
        strict=strict,
    )

    try:
        from pheno_convert.api import convert_flags

        result = convert_flags(flags, engine=engine, engine_modules=engine_module)
    except PhenoConvertError as exc:
        raise typer.Exit(code=_print_conversion_error(exc, debug, presenter))
    except Exception as exc:
        # Unexpected crash: still show a clean message; debug prints traceback.
        raise typer.Exit(code=_print_conversion_error(exc, debug, presenter))

    presenter.success("Saved", f"{result.output_path} ({result.operation})")


if __name__ == "__main__":
    app()
