from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pandas as pd

"""Delimited text writer.

Builds the text in memory through DataFrame.to_csv (no path argument), so
rendering never touches a file handle or a global output buffer.
"""

__all__ = [
    "write_delimited",
]


def write_delimited(
    header: Sequence[str], records: Sequence[Sequence[Any]], delimiter: str = ","
) -> str:
    """Serialize a header record and data records to delimited text.

    None cells are written as empty fields. Columns are positional so that
    repeated display headers do not collide.
    """
    # dtype=object で int/None 混在列の float 化を防ぐ
    df = pd.DataFrame(list(records), columns=range(len(header)), dtype=object)
    return df.to_csv(
        index=False,
        header=list(header),
        sep=delimiter,
        lineterminator="\n",
        na_rep="",
    )
