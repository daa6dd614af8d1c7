"""
Service-level exceptions

Routes translate these into HTTP responses; validation failures are raised
as HTTPException directly where they are detected.
"""


class TubelyError(Exception):
    """Base class for errors raised below the HTTP layer"""
    pass


class UnauthorizedError(TubelyError):
    """Missing, malformed, expired or otherwise invalid bearer token"""
    pass


class ExternalToolError(TubelyError):
    """ffprobe failed, timed out or produced output we cannot use"""
    pass


class StorageError(TubelyError):
    """Disk write, object upload or database persistence failed"""
    pass
