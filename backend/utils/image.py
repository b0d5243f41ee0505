import base64
import binascii

import numpy as np
import cv2


class InvalidImageError(ValueError):
    """Raised when a payload cannot be decoded into an image."""


def strip_data_url(data: str) -> str:
    """Drop a `data:image/...;base64,` prefix if the client sent a data URL."""
    if data.startswith("data:") and "," in data:
        return data.split(",", 1)[1]
    return data


def read_image(bytestr: bytes):
    arr = np.frombuffer(bytestr, np.uint8)
    img = cv2.imdecode(arr, cv2.IMREAD_COLOR)  # Returns BGR
    if img is None:
        raise InvalidImageError("Unsupported image format")
    return cv2.cvtColor(img, cv2.COLOR_BGR2RGB)


def decode_base64_image(data: str):
    """
    Decode a base64 string (or data URL) into an RGB image array.

    Raises InvalidImageError for anything that is not a decodable image.
    """
    if not isinstance(data, str) or not data.strip():
        raise InvalidImageError("Empty image payload")

    payload = "".join(strip_data_url(data.strip()).split())
    try:
        content = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidImageError("Invalid base64 image") from e

    if len(content) == 0:
        raise InvalidImageError("Empty image payload")
    return read_image(content)
