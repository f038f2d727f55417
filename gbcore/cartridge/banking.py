"""Register state of the supported memory bank controllers."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

__all__ = ["MBC1State", "MBC2State", "MBC3BankingMode", "MBC3State", "MBC5State"]

_MBC2_RAM_SIZE = 512


def _ram_enable_value(value: int) -> bool:
    return value & 0xF == 0xA


@dataclass
class MBC1State:
    """MBC1: a 7-bit banking register shared between ROM and RAM selection."""

    banking_register: int = 0
    ram_enabled: bool = False
    complex_mode: bool = False

    def zero_rom_bank(self) -> int:
        """Bank mapped at 0x0000..0x3FFF."""
        if not self.complex_mode:
            return 0
        return self.banking_register & 0b0110_0000

    def rom_bank(self) -> int:
        """Bank mapped at 0x4000..0x7FFF; a zero lower part selects the next bank."""
        bank = self.banking_register & 0b0111_1111
        if bank & 0b0001_1111 == 0:
            return bank + 1
        return bank

    def ram_bank(self) -> int:
        if not self.complex_mode:
            return 0
        return (self.banking_register >> 5) & 0b11

    def set_ram_bank(self, value: int) -> None:
        self.banking_register = (self.banking_register & 0b0001_1111) | ((value & 0b11) << 5)

    def set_rom_bank(self, value: int) -> None:
        self.banking_register = (self.banking_register & 0b0110_0000) | (value & 0b0001_1111)

    def set_ram_enable(self, value: int) -> None:
        self.ram_enabled = _ram_enable_value(value)

    def set_banking_mode(self, value: int) -> None:
        self.complex_mode = value == 1


@dataclass
class MBC2State:
    """MBC2: built-in 512 half-byte RAM and a 4-bit ROM bank register."""

    ram_enabled: bool = False
    ram_data: bytearray = field(default_factory=lambda: bytearray(_MBC2_RAM_SIZE))
    rom_bank: int = 1

    def set_register(self, addr: int, value: int) -> None:
        """Bit 8 of the address selects between RAM enable and ROM bank."""
        if addr & 0x100 == 0:
            self.ram_enabled = _ram_enable_value(value)
        else:
            self.rom_bank = (value & 0x0F) or 1


class MBC3BankingMode(enum.Enum):
    """What the 0xA000..0xBFFF window exposes on an MBC3."""

    RAM = "ram"
    RTC = "rtc"


@dataclass
class MBC3State:
    """MBC3 registers; the real-time clock reads as zero."""

    banking_mode: MBC3BankingMode = MBC3BankingMode.RAM
    rom_bank: int = 0
    ram_bank: int = 0
    ram_enabled: bool = False
    rtc_register: int = 0

    def effective_rom_bank(self) -> int:
        return self.rom_bank or 1

    def write_register(self, value: int) -> None:
        """Select a RAM bank (0..3) or an RTC register (8..0xB)."""
        if 0 <= value < 4:
            self.banking_mode = MBC3BankingMode.RAM
            self.ram_bank = value
        elif 8 <= value < 0xC:
            self.banking_mode = MBC3BankingMode.RTC
            self.rtc_register = value


@dataclass
class MBC5State:
    """MBC5: 9-bit ROM bank and 4-bit RAM bank."""

    rom_bank: int = 1
    ram_bank: int = 0
    ram_enabled: bool = False

    def set_ram_bank(self, value: int) -> None:
        self.ram_bank = value & 0x0F

    def set_rom_bank(self, value: int) -> None:
        self.rom_bank = (self.rom_bank & 0xFF00) | (value & 0xFF)

    def set_rom_bank_upper(self, value: int) -> None:
        self.rom_bank = (self.rom_bank & 0x00FF) | ((value & 1) << 8)

    def set_ram_enable(self, value: int) -> None:
        self.ram_enabled = _ram_enable_value(value)