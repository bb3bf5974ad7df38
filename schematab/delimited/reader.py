from __future__ import annotations

import io
from dataclasses import dataclass

import pandas as pd

from ..errors import DelimitedParseError

"""Delimited text reader.

1行目をヘッダ行として扱い、2行目以降をデータ行とする。
Quoting and escaping are left to pandas; every field is read back as the raw
text found in the input (no NA conversion, no dtype inference).
"""

__all__ = [
    "DelimitedData",
    "read_delimited",
]


@dataclass
class DelimitedData:
    header: list[str]
    records: list[list[str]]  # 短い行の欠落フィールドは空文字


def read_delimited(text: str, delimiter: str = ",") -> DelimitedData:
    """Tokenize a text blob into a header record and data records.

    Steps:
    1. Parse every line as raw strings (blank lines skipped)
    2. First record becomes the header
    3. Remaining records become data; fields missing at the end of a short
       record come back as empty strings

    Raises:
        DelimitedParseError: If the input is empty or a record cannot be tokenized
    """
    if not text or not text.strip():
        raise DelimitedParseError("input is empty: header line missing", row=-1)
    try:
        df = pd.read_csv(
            io.StringIO(text),
            sep=delimiter,
            header=None,
            dtype=str,
            keep_default_na=False,
            na_filter=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError as e:
        raise DelimitedParseError(f"input is empty: {e}", row=-1) from e
    except pd.errors.ParserError as e:
        raise DelimitedParseError(f"cannot tokenize input: {e}", row=-1) from e

    records: list[list[str]] = []
    for raw in df.itertuples(index=False, name=None):
        records.append([str(v) for v in raw])

    header = records[0]
    return DelimitedData(header=header, records=records[1:])
