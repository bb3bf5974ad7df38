from .buffer import TableBuffer

__all__ = [
    "TableBuffer",
]
