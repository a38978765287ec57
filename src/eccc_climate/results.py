"""Batch result type for multi-station downloads."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pandas as pd

from eccc_climate.errors import ClimateError


@dataclass
class UnitError:
    """Failure of one unit of work (a station or a climate ID)."""

    unit: Any
    error: ClimateError

    def __str__(self) -> str:
        return f"{self.unit}: {self.error}"


@dataclass
class BatchResult:
    rows: list[dict] = field(default_factory=list)
    errors: list[UnitError] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_frame(self, columns: list[str] | None = None) -> pd.DataFrame:
        """Infer a columnar table: union of row keys in first-seen order."""
        if columns is None:
            columns = []
            seen = set()
            for row in self.rows:
                for key in row:
                    if key not in seen:
                        seen.add(key)
                        columns.append(key)
        return pd.DataFrame.from_records(self.rows, columns=columns)
