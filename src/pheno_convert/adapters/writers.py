"""Output writer adapter serializing converted documents to disk."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

import yaml

from pheno_convert.errors import OutputWriteError
from pheno_convert.types import Document

logger = logging.getLogger(__name__)

YAML_SUFFIXES = frozenset({".yaml", ".yml"})


class DocumentWriter:
    """Write JSON (default) or YAML documents with an atomic rename.

    Concurrent writers targeting the same path are not coordinated; the
    last rename wins.
    """

    def __init__(self, *, indent: int = 2, file_mode: int = 0o644) -> None:
        self.indent = indent
        self.file_mode = file_mode

    def serialize(self, path: Path, document: Document) -> str:
        """Render ``document`` in the format implied by ``path``'s suffix."""
        try:
            if path.suffix.lower() in YAML_SUFFIXES:
                return yaml.safe_dump(
                    document,
                    sort_keys=False,
                    allow_unicode=True,
                    default_flow_style=False,
                )
            return json.dumps(document, indent=self.indent, ensure_ascii=False) + "\n"
        except (TypeError, ValueError, yaml.YAMLError) as exc:
            raise OutputWriteError(
                f"Converted document cannot be serialized: {exc}"
            ) from exc

    def write(self, path: Path, document: Document) -> Path:
        """Serialize and atomically replace ``path``.

        Raises
        ------
        OutputWriteError
            If serialization or any filesystem step fails. No partial file
            is left behind.
        """
        payload = self.serialize(path, document)
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
            )
        except OSError as exc:
            raise OutputWriteError(f"Unable to write {path}: {exc}") from exc

        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.chmod(tmp_path, self.file_mode)
            os.replace(tmp_path, path)
        except OSError as exc:
            tmp_path.unlink(missing_ok=True)
            raise OutputWriteError(f"Unable to write {path}: {exc}") from exc

        logger.debug("Wrote %d bytes to %s", len(payload.encode("utf-8")), path)
        return path
