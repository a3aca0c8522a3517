import numpy as np
import pytest

from foodie.exceptions import CameraUnavailableError
from foodie.services.qr import (
    BaseQRDecoder,
    CameraScanner,
    OpenCVQRDecoder,
    make_table_qr,
    table_qr_url,
)


class FakeCapture:
    """Stands in for cv2.VideoCapture; frames are handed to the decoder as-is."""

    def __init__(self, frames, opened=True):
        self.frames = list(frames)
        self.opened = opened
        self.released = False
        self.reads = 0

    def isOpened(self):
        return self.opened

    def read(self):
        if not self.frames:
            return False, None
        self.reads += 1
        return True, self.frames.pop(0)


class PassThroughDecoder(BaseQRDecoder):
    def decode(self, frame):
        return frame


def capture_factory(capture):
    def factory(device):
        return capture

    def release():
        capture.released = True

    capture.release = release
    return factory


class TestOpenCVDecoder:
    def test_decodes_generated_table_code(self):
        png = make_table_qr("https://menu.example.com", "200", "T3", outlet_name="Foodie", table_number="3")

        text = OpenCVQRDecoder().decode_image_bytes(png)

        assert text == table_qr_url("https://menu.example.com", "200", "T3", "Foodie", "3")
        assert text == "https://menu.example.com/?tableId=T3&outletId=200&outletName=Foodie&tableNumber=3"

    def test_blank_frame(self):
        frame = np.full((200, 200, 3), 255, dtype=np.uint8)
        assert OpenCVQRDecoder().decode(frame) is None

    def test_bytes_that_are_not_an_image(self):
        assert OpenCVQRDecoder().decode_image_bytes(b"definitely not a png") is None
        assert OpenCVQRDecoder().decode_image_bytes(b"") is None


class TestCameraScanner:
    def test_returns_first_valid_code(self):
        capture = FakeCapture([None, "hello", "https://x/?tableId=T1&outletId=O1", "/ac/9"])

        with CameraScanner(decoder=PassThroughDecoder(), capture_factory=capture_factory(capture)) as scanner:
            data = scanner.scan(max_frames=10)

        assert data.table_id == "T1"
        assert scanner.last_text == "https://x/?tableId=T1&outletId=O1"
        assert capture.reads == 3
        assert capture.released

    def test_gives_up_after_max_frames(self):
        capture = FakeCapture([None] * 20)

        with CameraScanner(decoder=PassThroughDecoder(), capture_factory=capture_factory(capture)) as scanner:
            assert scanner.scan(max_frames=5) is None

        assert capture.reads == 5
        assert capture.released

    def test_released_when_block_raises(self):
        capture = FakeCapture([])

        with pytest.raises(RuntimeError):
            with CameraScanner(decoder=PassThroughDecoder(), capture_factory=capture_factory(capture)):
                raise RuntimeError("boom")

        assert capture.released

    def test_released_when_stream_ends(self):
        capture = FakeCapture([None])

        with pytest.raises(CameraUnavailableError):
            with CameraScanner(decoder=PassThroughDecoder(), capture_factory=capture_factory(capture)) as scanner:
                scanner.scan(max_frames=10)

        assert capture.released

    def test_device_that_cannot_open(self):
        capture = FakeCapture([], opened=False)
        scanner = CameraScanner(decoder=PassThroughDecoder(), capture_factory=capture_factory(capture))

        with pytest.raises(CameraUnavailableError):
            with scanner:
                pass

        assert capture.released
        assert not scanner.is_open
