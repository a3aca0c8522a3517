"""
QR Decoder Adapter

Decoding itself is delegated to OpenCV. The storefront only needs
"frame in, text out", so the detector sits behind a small interface
that tests and the camera scanner share.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import cv2
import numpy as np

logger = logging.getLogger(__name__)


class BaseQRDecoder(ABC):
    """Turns an image frame into the text of the QR code it contains."""

    @abstractmethod
    def decode(self, frame: np.ndarray) -> Optional[str]:
        """
        Decode the first QR code found in `frame`.

        Returns:
            The decoded text, or None when no code is readable.
        """
        pass

    def decode_image_bytes(self, data: bytes) -> Optional[str]:
        """Decode an encoded image (PNG, JPEG, ...) instead of a raw frame."""
        if not data:
            return None

        frame = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_COLOR)
        if frame is None:
            logger.warning("QR Decoder: Uploaded bytes are not a readable image")
            return None

        return self.decode(frame)


class OpenCVQRDecoder(BaseQRDecoder):
    """cv2.QRCodeDetector backed decoder."""

    def __init__(self):
        self._detector = cv2.QRCodeDetector()

    def decode(self, frame: np.ndarray) -> Optional[str]:
        if frame is None or frame.size == 0:
            return None

        try:
            text, points, _ = self._detector.detectAndDecode(frame)
        except cv2.error as e:
            logger.warning(f"QR Decoder: OpenCV failed on frame: {e}")
            return None

        if points is None or not text:
            return None

        return text
