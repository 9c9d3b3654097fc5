"""Exception hierarchy for exportdiff."""


class ExportDiffError(Exception):
    """Base exception for all exportdiff errors."""


class SyncError(ExportDiffError):
    """Base exception for mark-synced failures."""


class NoGroupSelectedError(SyncError):
    """Mark synced was requested without a selected group."""


class UnknownGroupError(SyncError):
    """The selected group id is not in the registry."""


class NothingToSyncError(SyncError):
    """There is no message or cutoff to take the sync instant from."""
