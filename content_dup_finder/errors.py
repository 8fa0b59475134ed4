class ScanError(Exception):
    """Base class for every error raised by a scan."""


class TraversalError(ScanError):
    """A directory could not be listed or a path could not be resolved."""


class FileReadError(ScanError):
    """A discovered file could not be opened or read."""


class DigestError(ScanError):
    """A digest could not be computed for a file's contents."""


class StoreError(ScanError):
    """A single read or write against the digest index failed."""


class StoreOpenError(StoreError):
    """The digest index could not be opened."""


class PipelineError(ScanError):
    """The index updater stopped on an unexpected error."""
