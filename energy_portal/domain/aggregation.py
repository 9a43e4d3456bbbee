"""Per-building-type summary of the rows currently shown in the dataset view."""

from __future__ import annotations

from dataclasses import asdict
from typing import Sequence

import pandas as pd

from energy_portal.domain.models import METRIC_LABELS, DatasetRow


SUMMARY_COLUMNS = ["building_type", "count", "mean", "min", "max"]


def rows_to_frame(rows: Sequence[DatasetRow]) -> pd.DataFrame:
    return pd.DataFrame([asdict(row) for row in rows], columns=list(DatasetRow.__dataclass_fields__))


def summarize_metric(rows: Sequence[DatasetRow], metric: str) -> pd.DataFrame:
    """Count, mean, min and max of ``metric`` for each building type present."""
    if metric not in METRIC_LABELS:
        raise ValueError(f"Unknown metric: {metric}")
    frame = rows_to_frame(rows)
    if frame.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    summary = (
        frame.groupby("building_type", sort=True)[metric]
        .agg(["count", "mean", "min", "max"])
        .reset_index()
    )
    summary["count"] = summary["count"].astype(int)
    return summary[SUMMARY_COLUMNS]
