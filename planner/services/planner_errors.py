from __future__ import annotations


class SnapshotMissingError(ValueError):
    """Raised when the engine is called without a catalog or ledger snapshot.

    Missing snapshots point at a caller bug, unlike data anomalies such as
    unknown resource ids, which the engine answers with a fallback result.

    Args:
        message: High-level human-readable message for logs.
        technical_detail: Optional detail (which snapshot, which operation).
    """

    def __init__(self, message: str, *, technical_detail: str | None = None) -> None:
        super().__init__(message)
        self.technical_detail = technical_detail


def require_snapshot(value: object, name: str, operation: str) -> None:
    """Raise :class:`SnapshotMissingError` when ``value`` is ``None``."""
    if value is None:
        raise SnapshotMissingError(
            f"{name} snapshot is required",
            technical_detail=f"{operation} called with {name}=None",
        )
