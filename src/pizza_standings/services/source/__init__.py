from .client import (
    ApiSnapshotSource,
    FileSnapshotSource,
    SnapshotSource,
    create_source,
    unwrap_snapshot,
)

__all__ = [
    "ApiSnapshotSource",
    "FileSnapshotSource",
    "SnapshotSource",
    "create_source",
    "unwrap_snapshot",
]
