"""Table value model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, model_validator


class Table(BaseModel):
    """Ordered columns and rows of opaque text cells.

    Every row holds exactly one cell per column. Cell values such as ``NULL``
    or ``42`` are kept verbatim.
    """

    model_config = ConfigDict(frozen=True)

    columns: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...] = ()

    @model_validator(mode="after")
    def _check_shape(self) -> "Table":
        if not self.columns:
            raise ValueError("table must have at least one column")
        if len(set(self.columns)) != len(self.columns):
            raise ValueError("table column names must be unique")
        for index, row in enumerate(self.rows, start=1):
            if len(row) != len(self.columns):
                raise ValueError(
                    f"row {index} has {len(row)} cells, expected {len(self.columns)}"
                )
        return self

    @property
    def column_count(self) -> int:
        return len(self.columns)
