"""Loading matters from files and writing check results."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pandas as pd

from coi.schemas import result_to_dict
from coi.types import ConflictCheckResult, Matter


SUPPORTED_SUFFIXES = (".csv", ".jsonl", ".xlsx", ".xls")


def _read_frame(path: Path) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".jsonl":
        return pd.read_json(path, lines=True, dtype=False)
    if suffix in (".xlsx", ".xls"):
        return pd.read_excel(path, dtype=object)
    if suffix == ".csv":
        return pd.read_csv(path, dtype=str, keep_default_na=True)
    expected = ", ".join(SUPPORTED_SUFFIXES)
    raise ValueError(f"unsupported matters file {path.name!r}: expected one of {expected}")


def _cell(row: pd.Series, column: str) -> Any:
    value = row.get(column)
    if value is None or (not isinstance(value, (list, dict)) and pd.isna(value)):
        return None
    return value


def _text(row: pd.Series, column: str) -> str | None:
    value = _cell(row, column)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _timestamp(value: Any) -> datetime:
    if value is None:
        return datetime.now(timezone.utc)
    ts = pd.Timestamp(value)
    if ts.tzinfo is None:
        ts = ts.tz_localize("UTC")
    return ts.to_pydatetime()


def read_matters(path: str | Path, owner_id: str | None = None) -> list[Matter]:
    """Read matters from CSV, JSONL or Excel.

    Rows without an id are skipped. `owner_id` fills in rows that have no
    owner column value.
    """
    path = Path(path)
    df = _read_frame(path)

    matters: list[Matter] = []
    for _, row in df.iterrows():
        matter_id = _text(row, "id")
        if matter_id is None:
            continue
        matters.append(
            Matter(
                id=matter_id,
                title=_text(row, "title") or matter_id,
                created_at=_timestamp(_cell(row, "created_at")),
                client_name=_text(row, "client_name"),
                adverse_party=_text(row, "adverse_party"),
                description=_text(row, "description"),
                owner_id=_text(row, "owner_id") or owner_id or "",
            )
        )
    return matters


def write_result(result: ConflictCheckResult, path: str | Path, check_id: str | None = None) -> None:
    """Write a check result as camelCase JSON."""
    path = Path(path)
    data = result_to_dict(result)
    if check_id is not None:
        data["conflictCheckId"] = check_id
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2))
