"""Export flat rows to CSV, Parquet or a tab-separated stream."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, Iterable, TextIO

import duckdb


def _records(rows: Iterable[Any]) -> list[dict[str, Any]]:
    return [r.as_record() if hasattr(r, "as_record") else dict(r) for r in rows]


def export_rows_to_csv(rows: Iterable[Any], output_path: str | Path, columns: list[str]) -> int:
    """Write rows to CSV with a header in the given column order. Returns row count."""
    path = Path(output_path).resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    records = _records(rows)
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=columns)
        writer.writeheader()
        writer.writerows(records)
    return len(records)


def _duckdb_type(value: Any) -> str:
    if isinstance(value, bool):
        return "BOOLEAN"
    if isinstance(value, int):
        return "BIGINT"
    if isinstance(value, float):
        return "DOUBLE"
    return "VARCHAR"


def export_rows_to_parquet(rows: Iterable[Any], output_path: str | Path, columns: list[str]) -> int:
    """Write rows to a Parquet file through an in-memory DuckDB table. Returns row count."""
    path = Path(output_path).resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    path_str = str(path).replace("\\", "\\\\").replace("'", "''")
    records = _records(rows)
    conn = duckdb.connect(":memory:")
    try:
        first = records[0] if records else {}
        column_sql = ", ".join(f'"{c}" {_duckdb_type(first.get(c))}' for c in columns)
        conn.execute(f"CREATE TABLE sheet ({column_sql})")
        if records:
            placeholders = ", ".join("?" for _ in columns)
            conn.executemany(
                f"INSERT INTO sheet VALUES ({placeholders})",
                [[rec.get(c) for c in columns] for rec in records],
            )
        conn.execute(f"COPY sheet TO '{path_str}' (FORMAT PARQUET)")
        count = conn.execute("SELECT COUNT(*) FROM sheet").fetchone()[0]
    finally:
        conn.close()
    return count


def export_rows(rows: Iterable[Any], output_path: str | Path, columns: list[str]) -> int:
    """Dispatch on file suffix: .parquet -> Parquet, anything else -> CSV."""
    if Path(output_path).suffix.lower() == ".parquet":
        return export_rows_to_parquet(rows, output_path, columns)
    return export_rows_to_csv(rows, output_path, columns)


def write_table(rows: Iterable[Any], stream: TextIO, columns: list[str]) -> int:
    """Tab-separated table (header + rows) for pasting into a spreadsheet. Cells with tabs or newlines are quoted."""
    records = _records(rows)
    writer = csv.DictWriter(stream, fieldnames=columns, delimiter="\t", lineterminator="\n", extrasaction="ignore")
    writer.writeheader()
    writer.writerows(records)
    return len(records)
