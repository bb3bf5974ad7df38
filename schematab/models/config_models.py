from __future__ import annotations

from dataclasses import dataclass

from ..errors import SchemaError

"""Option dataclasses for the table buffer.

These are separate from the YAML loader in schematab/config/loader.py and
focus on typing the behavioral switches of a single TableBuffer.
"""


@dataclass(frozen=True)
class TableOptions:
    """Behavioral switches of a TableBuffer.

    - delimiter: single field separator used by load and render
    - strict_columns: writes to undeclared columns raise UnknownColumnError
      (False: the write is ignored)
    - strict_headers: header count and positions must match the schema
      (False: header fields are matched by name, unknown fields skipped)
    """
    delimiter: str = ","
    strict_columns: bool = True
    strict_headers: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.delimiter, str) or len(self.delimiter) != 1:
            raise SchemaError(f"delimiter must be a single character, got {self.delimiter!r}")
        if self.delimiter in ('"', "\n", "\r"):
            raise SchemaError(f"delimiter {self.delimiter!r} is not allowed")
