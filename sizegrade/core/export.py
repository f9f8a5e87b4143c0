"""
CSV export of graded sizes.

Layout: one header row ``Size,<measurement labels…>`` followed by one row
per graded size, in the order given.  Cells read "<value> <unit>", using
the category's first measurement unit for every column.
"""

from __future__ import annotations

import csv
import io
from typing import Iterable

from sizegrade.core.categories import CategoryConfig, CategoryRegistry, resolve_category
from sizegrade.core.grading import format_number
from sizegrade.models.schemas import GradedSize

EXPORT_FILENAME = "size-grading.csv"


def _cell(value: float | None, unit: str) -> str:
    if value is None:
        return ""
    return f"{format_number(value)} {unit}"


def export_graded_csv(
    category: str | CategoryConfig,
    graded_sizes: Iterable[GradedSize],
    registry: CategoryRegistry | None = None,
) -> str:
    cat = resolve_category(category, registry)
    unit = cat.measurements[0].unit if cat.measurements else "mm"

    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(["Size", *(m.label for m in cat.measurements)])
    for gs in graded_sizes:
        writer.writerow([
            gs.size_label,
            *(_cell(gs.measurements.get(m.key), unit) for m in cat.measurements),
        ])
    return buf.getvalue()
