from __future__ import annotations

import csv
import io
from typing import Iterable, Optional, Sequence

from ..attendance.model import JoinedRecord
from ..common.datetime_utils import format_timestamp
from ..core.constants import CSV_HEADER


def format_hours(value: Optional[float]) -> str:
    """Whole hours without a fractional part, missing hours as ``0``."""
    if not value:
        return "0"
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)


def to_csv_rows(rows: Iterable[JoinedRecord]) -> list[list[str]]:
    """Header row plus one row per record, columns in the fixed export order."""
    out: list[list[str]] = [list(CSV_HEADER)]
    for r in rows:
        out.append(
            [
                r.employee_code,
                r.name,
                r.department,
                r.work_date.isoformat(),
                format_timestamp(r.check_in_time),
                format_timestamp(r.check_out_time),
                r.status.value,
                format_hours(r.total_hours),
            ]
        )
    return out


def to_csv(rows: Sequence[JoinedRecord]) -> str:
    """Render rows as CSV text, newline separated, without a trailing newline.

    Fields holding the delimiter are quoted by the csv writer.
    """

    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerows(to_csv_rows(rows))
    return out.getvalue().removesuffix("\n")
