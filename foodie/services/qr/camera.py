"""
Camera QR Scanner

Reads frames from a local camera until one holds a valid table code.

    with CameraScanner(device=0) as scanner:
        data = scanner.scan()

The device is released when the block exits, whether the scan succeeded,
gave up, or raised.
"""

import logging
from typing import Optional

import cv2

from foodie.exceptions import CameraUnavailableError, QRPayloadError
from foodie.schemas import QRCodeData
from foodie.services.qr.decoder import BaseQRDecoder, OpenCVQRDecoder
from foodie.services.qr.payload import parse_qr_payload

logger = logging.getLogger(__name__)


class CameraScanner:
    def __init__(
        self,
        device: int = 0,
        decoder: Optional[BaseQRDecoder] = None,
        capture_factory=cv2.VideoCapture,
    ):
        self.device = device
        self.decoder = decoder or OpenCVQRDecoder()
        self._capture_factory = capture_factory
        self._capture = None
        self.last_text: Optional[str] = None

    def __enter__(self) -> "CameraScanner":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    @property
    def is_open(self) -> bool:
        return self._capture is not None

    def open(self) -> None:
        capture = self._capture_factory(self.device)
        if not capture.isOpened():
            capture.release()
            logger.error(f"Camera: Could not open device {self.device}")
            raise CameraUnavailableError()

        self._capture = capture
        logger.info(f"Camera: Device {self.device} opened")

    def release(self) -> None:
        if self._capture is None:
            return
        try:
            self._capture.release()
        finally:
            self._capture = None
            logger.info(f"Camera: Device {self.device} released")

    def scan(self, max_frames: int = 300) -> Optional[QRCodeData]:
        """
        Read up to `max_frames` frames and return the first valid payload.

        Codes that decode but are not table codes are skipped.

        Returns:
            QRCodeData, or None when no valid code was seen.

        Raises:
            CameraUnavailableError: The camera is not open or stops
                delivering frames.
        """
        if self._capture is None:
            raise CameraUnavailableError("Camera is not open")

        for _ in range(max_frames):
            ok, frame = self._capture.read()
            if not ok:
                raise CameraUnavailableError("Camera stopped delivering frames")

            text = self.decoder.decode(frame)
            if not text:
                continue

            try:
                data = parse_qr_payload(text)
            except QRPayloadError:
                logger.debug(f"Camera: Ignoring non-table QR code {text!r}")
                continue

            self.last_text = text
            return data

        logger.info(f"Camera: No valid QR code in {max_frames} frames")
        return None
