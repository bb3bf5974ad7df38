from .reader import DelimitedData, read_delimited
from .writer import write_delimited

__all__ = [
    "DelimitedData",
    "read_delimited",
    "write_delimited",
]
