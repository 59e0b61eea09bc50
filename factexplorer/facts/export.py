# factexplorer/facts/export.py
"""CSV / XLSX serialization of an already computed projection."""
import io
from typing import Any, Optional, Sequence

import pandas as pd

from .pivot import Projection
from .types import FactRow, to_comparable_string

MAX_COLUMN_WIDTH = 70
LIST_HEADERS = ["host", "factPath", "value"]


def list_projection(rows: Sequence[FactRow], include_modified: bool = False) -> Projection:
    """Reshape flat rows into export records (host, factPath, value[, modified])."""
    headers = LIST_HEADERS + (["modified"] if include_modified else [])
    data = []
    for r in rows:
        record = {"host": r.host, "factPath": r.fact_path, "value": r.value}
        if include_modified:
            record["modified"] = r.modified
        data.append(record)
    return Projection(data=data, headers=headers)


def _cell(value: Any) -> str:
    if value is None:
        return ""
    return to_comparable_string(value)


def _escape_csv(value: Any) -> str:
    text = _cell(value)
    if any(ch in text for ch in ',"\n\r'):
        return '"' + text.replace('"', '""') + '"'
    return text


def to_csv(projection: Projection) -> Optional[str]:
    """Header line plus one line per record. Returns None when there is nothing to export."""
    if not projection.data:
        return None
    lines = [",".join(_escape_csv(h) for h in projection.headers)]
    for record in projection.data:
        lines.append(",".join(_escape_csv(record.get(h)) for h in projection.headers))
    return "\n".join(lines)


def to_xlsx(projection: Projection, sheet_name: str = "Facts") -> Optional[bytes]:
    """Single-sheet workbook with columns sized to their longest cell (capped)."""
    if not projection.data:
        return None

    frame = pd.DataFrame(
        [[record.get(h) for h in projection.headers] for record in projection.data],
        columns=projection.headers,
    )
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        frame.to_excel(writer, sheet_name=sheet_name, index=False)
        sheet = writer.sheets[sheet_name]
        for idx, header in enumerate(projection.headers):
            longest = max(
                [len(header)] + [len(_cell(record.get(header))) for record in projection.data]
            )
            letter = sheet.cell(row=1, column=idx + 1).column_letter
            sheet.column_dimensions[letter].width = min(MAX_COLUMN_WIDTH, longest + 2)
    return buf.getvalue()
