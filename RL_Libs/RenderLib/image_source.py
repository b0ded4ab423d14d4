"""
Image source adapters: fetch and decode images into RasterBuffers.

The effect pipeline never touches container formats. This module is the
boundary where Pillow decodes PNG/JPEG/... bytes into an RGBA RasterBuffer,
and where remote images are fetched with requests.

Classes:
    ImageFetcher: One-shot HTTP fetcher with optional relay transport

Functions:
    raster_from_image: Convert a PIL Image to a RasterBuffer
    image_from_raster: Convert a RasterBuffer to a PIL Image
    decode_raster: Decode encoded image bytes into a RasterBuffer
    load_raster: Load a local image file into a RasterBuffer
"""

from io import BytesIO
from pathlib import Path
from typing import Any, Optional, Union
import logging

import requests

from RL_Libs.constants import BLOCKED_HTTP_STATUSES, DEFAULT_FETCH_TIMEOUT, RELAY_URL_PARAM
from RL_Libs.errors import FetchBlocked, FetchFailed
from RL_Libs.pillow_compat import Image, UnidentifiedImageError
from RL_Libs.RasterLib.raster_models import RasterBuffer

logger = logging.getLogger(__name__)


def raster_from_image(image: Any) -> RasterBuffer:
    """
    Convert a PIL Image of any mode to an RGBA RasterBuffer.

    Raises:
        TypeError: If image is not a PIL Image
    """
    if not hasattr(image, "convert") or not hasattr(image, "tobytes"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    rgba = image if image.mode == "RGBA" else image.convert("RGBA")
    width, height = rgba.size
    return RasterBuffer(width, height, rgba.tobytes())


def image_from_raster(raster: RasterBuffer) -> Any:
    """Convert a RasterBuffer to an RGBA PIL Image."""
    return Image.frombytes("RGBA", (raster.width, raster.height), raster.to_bytes())


def decode_raster(data: bytes) -> RasterBuffer:
    """
    Decode encoded image bytes (PNG, JPEG, ...) into a RasterBuffer.

    Raises:
        FetchFailed: If the bytes are not a decodable image or exceed
            Pillow's decompression bomb limit
    """
    try:
        with Image.open(BytesIO(data)) as image:
            image.load()
            return raster_from_image(image)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
        raise FetchFailed(f"Could not decode image data: {exc}") from exc


def load_raster(path: Union[str, Path]) -> RasterBuffer:
    """
    Load a local image file into a RasterBuffer.

    Raises:
        FetchFailed: If the file cannot be read or decoded
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise FetchFailed(f"Could not read image file {path}: {exc}") from exc
    return decode_raster(data)


class ImageFetcher:
    """
    Fetches remote images and decodes them into RasterBuffers.

    Each fetch is a single request: there is no retry policy. Responses that
    signal an access policy refusal raise FetchBlocked, which callers recover
    from by switching transport (a relay), not by repeating the request.

    Args:
        session: requests.Session to use (a new one is created if omitted)
        timeout: Request timeout in seconds (None = wait indefinitely)
        relay_url: Optional relay endpoint; when set, images are requested as
                   GET relay_url?url=<image url>
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = DEFAULT_FETCH_TIMEOUT,
        relay_url: Optional[str] = None,
    ):
        self.session = session or requests.Session()
        self.timeout = timeout
        self.relay_url = relay_url

    def with_relay(self, relay_url: str) -> "ImageFetcher":
        """Return a fetcher sharing this session that uses a relay transport."""
        return ImageFetcher(self.session, self.timeout, relay_url)

    def fetch_bytes(self, url: str) -> bytes:
        """
        Download the raw bytes of an image.

        Raises:
            FetchBlocked: If the server refuses pixel access (401/403/407/451)
            FetchFailed: On any other HTTP or network error
        """
        if self.relay_url:
            request_url = self.relay_url
            params = {RELAY_URL_PARAM: url}
        else:
            request_url = url
            params = None

        logger.debug(f"Fetching image {url} via {request_url}")
        try:
            response = self.session.get(request_url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise FetchFailed(f"Could not fetch {url}: {exc}") from exc

        if response.status_code in BLOCKED_HTTP_STATUSES:
            logger.warning(f"Pixel access blocked for {url} (HTTP {response.status_code})")
            raise FetchBlocked(url, response.status_code)

        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            raise FetchFailed(f"Could not fetch {url}: {exc}") from exc

        return response.content

    def fetch(self, url: str) -> RasterBuffer:
        """
        Fetch and decode a remote image.

        Raises:
            FetchBlocked: If pixel access is refused
            FetchFailed: On network, HTTP or decode errors
        """
        return decode_raster(self.fetch_bytes(url))
