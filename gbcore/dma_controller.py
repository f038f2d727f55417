"""General purpose and HBlank DMA controller of the Colour Game Boy."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

_log = logging.getLogger(__name__)

_BIT_7 = 0x80
_U16 = 0xFFFF
_ROW_BYTES = 0x10


@dataclass(frozen=True)
class TransferRequest:
    """A block copy the caller must perform."""

    gdma: bool
    source: int
    destination: int
    rows: int


class TransferMode(enum.Enum):
    GENERAL_PURPOSE = "general_purpose"
    HBLANK = "hblank"


class DMAController:
    """State of the HDMA1..HDMA5 registers."""

    def __init__(self) -> None:
        self._source = 0
        self._destination = 0
        self._hdma5 = 0xFF

    def write_source_high(self, value: int) -> None:
        self._source = (self._source & 0x00FF) | ((value & 0xFF) << 8)

    def write_source_low(self, value: int) -> None:
        self._source = (self._source & 0xFF00) | (value & 0xF0)

    def write_destination_high(self, value: int) -> None:
        self._destination = (self._destination & 0x00FF) | ((value & 0x1F) << 8) | 0x8000

    def write_destination_low(self, value: int) -> None:
        self._destination = (self._destination & 0xFF00) | (value & 0xF0)

    @property
    def hdma5(self) -> int:
        return self._hdma5

    @property
    def source(self) -> int:
        """Source address, with the echo RAM region mapped onto external RAM."""
        if 0xE000 <= self._source <= 0xFFFF:
            return self._source - 0xE000 + 0xA000
        return self._source

    @property
    def destination(self) -> int:
        return self._destination

    @property
    def active(self) -> bool:
        return self._hdma5 & _BIT_7 == 0

    def _advance(self, rows: int) -> None:
        self._source = (self._source + rows * _ROW_BYTES) & _U16
        self._destination = (self._destination + rows * _ROW_BYTES) & _U16

    def write_hdma5(self, value: int) -> TransferRequest | None:
        """Start, adjust or stop a transfer; a general purpose one is returned at once."""
        _log.info("Wrote to HDMA: %04X", value)

        if self.active:
            if value & _BIT_7:
                self._hdma5 = value & 0x7F
            else:
                _log.info("Write to HDMA caused pause")
                self._hdma5 = _BIT_7
            return None

        if value & _BIT_7 == 0:
            rows = (value & 0x7F) + 1
            request = TransferRequest(
                gdma=True, source=self.source, destination=self.destination, rows=rows
            )
            self._hdma5 = 0xFF
            self._advance(rows)
            return request

        self._hdma5 = value & 0x7F
        _log.info("HBlank DMA transfer requested")
        return None

    def step(self) -> TransferRequest | None:
        """Advance an HBlank transfer by one row; the caller performs the copy."""
        if not self.active:
            return None
        _log.info(
            "Stepping DMA src:%X dest:%X hdma5:%X", self.source, self.destination, self._hdma5
        )
        request = TransferRequest(
            gdma=False, source=self.source, destination=self.destination, rows=1
        )
        self._advance(1)
        self._hdma5 = (self._hdma5 - 1) & 0xFF
        return request