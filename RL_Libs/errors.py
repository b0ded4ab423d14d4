"""
Error types for Rover Lens.

Classes:
    RoverLensError: Base class for every library error
    InvalidBuffer: Malformed raster dimensions or byte length (caller bug)
    OutOfBounds: Pixel coordinates outside the raster (pipeline defect)
    FetchBlocked: Access policy prevented reading the source pixels
    FetchFailed: Any other failure fetching or decoding the source image
    ExportFailed: Encoding or writing the exported image failed
"""

from typing import Optional


class RoverLensError(Exception):
    """Base class for all Rover Lens errors."""


class InvalidBuffer(RoverLensError, ValueError):
    pass


class OutOfBounds(RoverLensError, IndexError):
    pass


class FetchBlocked(RoverLensError):
    """
    The remote image exists but its pixels cannot be read with this transport.

    Retrying the same request will not help. Callers should switch transport,
    for example by configuring a relay on the ImageFetcher.
    """

    def __init__(self, url: str, status: Optional[int] = None) -> None:
        self.url = url
        self.status = status
        detail = f" (HTTP {status})" if status is not None else ""
        super().__init__(
            f"Pixel access to {url} is blocked{detail}. "
            f"Retry through a relay/proxy transport."
        )


class FetchFailed(RoverLensError):
    pass


class ExportFailed(RoverLensError, OSError):
    def __init__(self, message: str, path: Optional[object] = None) -> None:
        super().__init__(message)
        self.path = path
