from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

"""Row model for the table buffer.

A Row is either open (the current row accepting cell writes, possibly sparse)
or closed (finalized, every schema column present as a key).
"""

__all__ = [
    "Row",
]


@dataclass
class Row:
    """Single row of the in-memory row store."""
    index: int  # 0 始まりの行番号
    values: dict[str, Any] = field(default_factory=dict)  # column id -> value
    closed: bool = False

    def holds(self, column_id: str) -> bool:
        """True when the cell holds a non-blank value (None and "" count as blank)."""
        value = self.values.get(column_id)
        return value is not None and value != ""

    def copy(self) -> Row:
        return Row(index=self.index, values=dict(self.values), closed=self.closed)
