"""Terminal presentation for CLI results and errors."""

from __future__ import annotations

from dataclasses import dataclass

import typer


@dataclass(frozen=True)
class Presenter:
    """Render user-facing lines, colored only when ``color`` is set."""

    color: bool = True

    def success(self, label: str, message: str) -> None:
        """Print a success line to stdout."""
        typer.echo(f"{self._style(f'✓ {label}:', fg=typer.colors.GREEN)} {message}")

    def error(self, label: str, message: str) -> None:
        """Print an error line to stderr."""
        typer.echo(
            f"{self._style(f'✗ {label}:', fg=typer.colors.RED, bold=True)} {message}",
            err=True,
        )

    def detail(self, text: str) -> None:
        """Print secondary diagnostic text to stderr."""
        typer.echo(self._style(text, dim=True), err=True)

    def _style(self, text: str, **styles: object) -> str:
        if not self.color:
            return text
        return typer.style(text, **styles)  # type: ignore[arg-type]
