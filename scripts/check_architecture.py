#!/usr/bin/env python3
"""Layer boundary checks for the pheno_convert package."""

from __future__ import annotations

from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
PACKAGE = ROOT / "src/pheno_convert"


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _assert_no_imports(path: Path, banned: list[str]) -> None:
    text = _read(path)
    for token in banned:
        if token in text:
            raise SystemExit(f"Layer violation in {path}: found '{token}'")


def main() -> None:
    """Check that presentation and serialization stay at the edges."""
    for path in (PACKAGE / "cli").glob("*.py"):
        _assert_no_imports(
            path,
            [
                "pheno_convert.adapters",
                "pheno_convert.engines",
                "import yaml",
            ],
        )

    for path in (PACKAGE / "application").glob("*.py"):
        _assert_no_imports(
            path,
            [
                "import typer",
                "from typer",
                "import yaml",
                "pheno_convert.cli",
            ],
        )

    for path in (PACKAGE / "engines").glob("*.py"):
        _assert_no_imports(path, ["import typer", "from typer"])

    print("Layer checks passed.")


if __name__ == "__main__":
    main()
