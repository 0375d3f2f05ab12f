"""Error taxonomy of the data layer.

None of these cross a pipeline boundary: timeouts and transport failures
become fallback values, malformed cache entries become misses, and a
projection failure becomes a default view plus an error string.
"""


class DeltaError(Exception):
    """Base error."""

    def __init__(self, message: str = "Data layer error"):
        self.message = message
        super().__init__(self.message)


class DeadlineExceeded(DeltaError):
    """Upstream call did not finish before its deadline."""

    def __init__(self, name: str, deadline_ms: int):
        self.name = name
        self.deadline_ms = deadline_ms
        super().__init__(f"{name or 'call'} exceeded {deadline_ms} ms")


class TransportFailure(DeltaError):
    """Upstream call raised."""

    def __init__(self, name: str, cause: BaseException):
        self.name = name
        self.cause = cause
        super().__init__(f"{name or 'call'} failed: {cause!r}")


class MalformedCache(DeltaError):
    """Stored cache bytes could not be decoded."""

    def __init__(self, key: str, reason: str):
        self.key = key
        super().__init__(f"Malformed cache entry {key}: {reason}")


class ProjectionFailure(DeltaError):
    """Merging upstream outcomes into a view model failed."""
