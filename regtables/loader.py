"""Table record loader.

Reads a collection of regression tables from disk and validates it into
TableRecord models. Supported formats:

- ``.json``: a JSON array of table objects
- ``.yaml`` / ``.yml``: a YAML sequence of table objects
- ``.js``: a script assigning the array to a variable, e.g.
  ``const tablesData = [...];``
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from regtables.models import TableRecord

logger = logging.getLogger(__name__)

__all__ = ["TableLoadError", "load_tables", "parse_tables"]

_JS_ASSIGNMENT = re.compile(r"^\s*(?:(?:const|let|var)\s+)?[\w.$]+\s*=\s*", re.MULTILINE)


class TableLoadError(Exception):
    """Raised when a table collection cannot be read or parsed."""

    pass


def _strip_js_assignment(text: str) -> str:
    """Reduce ``const tablesData = [...];`` to the array literal."""
    match = _JS_ASSIGNMENT.search(text)
    if match is not None:
        text = text[match.end() :]
    return text.strip().rstrip(";").strip()


def parse_tables(raw: Any, source: str = "<memory>") -> list[TableRecord]:
    """Validate already-parsed table data.

    Args:
        raw: Sequence of table mappings
        source: Where the data came from, for error messages

    Returns:
        Validated table records, in input order

    Raises:
        TableLoadError: If the data is not a sequence of table mappings

    """
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise TableLoadError(f"Expected a list of tables in {source}, got {type(raw).__name__}")

    tables: list[TableRecord] = []
    for position, item in enumerate(raw, 1):
        try:
            tables.append(TableRecord.model_validate(item))
        except ValidationError as e:
            raise TableLoadError(f"Invalid table #{position} in {source}: {e}") from e
    logger.info("Loaded %d tables from %s", len(tables), source)
    return tables


def load_tables(path: str | Path) -> list[TableRecord]:
    """Load a table collection from a file.

    Args:
        path: JSON, YAML or JavaScript data file

    Returns:
        Validated table records

    Raises:
        TableLoadError: If the file cannot be read or parsed

    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise TableLoadError(f"Table file not found: {path}")
    except PermissionError:
        raise TableLoadError(f"Permission denied reading: {path}")
    except UnicodeDecodeError:
        raise TableLoadError(f"Table file is not valid UTF-8: {path}")
    except OSError as e:
        raise TableLoadError(f"Cannot read {path}: {e}")

    suffix = path.suffix.lower()
    try:
        if suffix in (".yaml", ".yml"):
            raw = yaml.safe_load(text)
        elif suffix == ".js":
            raw = json.loads(_strip_js_assignment(text))
        else:
            raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise TableLoadError(f"Invalid JSON in {path}: {e}")
    except yaml.YAMLError as e:
        raise TableLoadError(f"Invalid YAML in {path}: {e}")

    return parse_tables(raw, source=str(path))
