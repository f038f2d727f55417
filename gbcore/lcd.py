"""Frame buffers of the 160x144 LCD."""

from __future__ import annotations

import enum

Color = tuple[int, int, int, int]

WIDTH = 160
HEIGHT = 144
_BYTES_PER_PIXEL = 4
_FILL = 100


class SyncMode(enum.Enum):
    DOUBLE_BUFFERED = "double_buffered"
    NONE = "none"


class GameboyLCD:
    """RGBA frame buffers, optionally double buffered."""

    def __init__(self, sync_mode: SyncMode = SyncMode.NONE, scale: float = 3.0) -> None:
        size = WIDTH * HEIGHT * _BYTES_PER_PIXEL
        self._front = bytearray([_FILL]) * size
        self._back = bytearray([_FILL]) * size
        self.sync_mode = sync_mode
        self.frame = 0
        self.scale = scale

    @property
    def size(self) -> tuple[int, int]:
        return WIDTH, HEIGHT

    def put_pixel(self, x: int, y: int, color: Color) -> None:
        """Write one RGBA pixel into the back buffer."""
        index = (y * WIDTH + x) * _BYTES_PER_PIXEL
        if index < 0 or index + _BYTES_PER_PIXEL > len(self._back):
            raise IndexError(f"pixel ({x}, {y}) is outside the screen")
        self._back[index : index + _BYTES_PER_PIXEL] = bytes(color)

    def swap_buffers(self) -> None:
        self.frame += 1
        if self.sync_mode is SyncMode.DOUBLE_BUFFERED:
            self._front, self._back = self._back, self._front

    def front_buffer(self) -> memoryview:
        """Read-only view of the buffer that should be displayed."""
        buffer = self._front if self.sync_mode is SyncMode.DOUBLE_BUFFERED else self._back
        return memoryview(buffer).toreadonly()