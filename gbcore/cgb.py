"""Colour Game Boy specific state: speed switching and bank selection."""

from __future__ import annotations

import enum
from dataclasses import dataclass

_BIT_0 = 0x01
_BIT_7 = 0x80


class Speed(enum.Enum):
    """CPU clock speed."""

    NORMAL = "normal"
    DOUBLE = "double"

    def toggled(self) -> Speed:
        return Speed.DOUBLE if self is Speed.NORMAL else Speed.NORMAL


class VRAMBank(enum.IntEnum):
    """Selected video RAM bank."""

    BANK0 = 0
    BANK1 = 1

    @classmethod
    def from_register(cls, value: int) -> VRAMBank:
        """Select a bank from the VBK register; only bit 0 is significant."""
        return cls(value & _BIT_0)


@dataclass
class CGBState:
    """Registers that only exist in Colour Game Boy mode."""

    wram_bank: int = 1
    vram_bank: VRAMBank = VRAMBank.BANK0
    speed: Speed = Speed.NORMAL
    prepare_speed_switch: bool = False

    def set_vram_bank(self, bank: int) -> None:
        self.vram_bank = VRAMBank.from_register(bank)

    def write_key1(self, value: int) -> None:
        self.prepare_speed_switch = value & _BIT_0 == _BIT_0

    def read_key1(self) -> int:
        speed_bit = _BIT_7 if self.speed is Speed.DOUBLE else 0
        switch_bit = _BIT_0 if self.prepare_speed_switch else 0
        return switch_bit | speed_bit

    def perform_speed_switch(self) -> bool:
        """Switch speed if one was prepared; return whether it happened."""
        if not self.prepare_speed_switch:
            return False
        self.speed = self.speed.toggled()
        self.prepare_speed_switch = False
        return True