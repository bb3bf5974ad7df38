from .reconcile import reconcile_headers

__all__ = [
    "reconcile_headers",
]
