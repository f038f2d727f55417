"""Parsing of the cartridge header and the ROM/RAM bank storage."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "CartridgeParseError",
    "RawCartridgeHeader",
    "CartridgeInfo",
    "CartridgeData",
    "create_rom_banks",
    "ROM_BANK_SIZE",
    "RAM_BANK_SIZE",
]

ROM_BANK_SIZE = 0x4000
RAM_BANK_SIZE = 0x2000
_HEADER_END = 0x0150

_RAM_BANKS_BY_CODE = {0x00: 0, 0x01: 0, 0x02: 1, 0x03: 4, 0x04: 16, 0x05: 8}


class CartridgeParseError(ValueError):
    """The cartridge header describes something that cannot be loaded."""

    class Kind(enum.Enum):
        MBC_TYPE = "unsupported cartridge type"
        ROM_SIZE = "invalid ROM size"
        RAM_SIZE = "invalid RAM size"
        TITLE = "title is not valid UTF-8"

    def __init__(self, kind: CartridgeParseError.Kind, detail: str | None = None) -> None:
        message = kind.value if detail is None else f"{kind.value}: {detail}"
        super().__init__(message)
        self.kind = kind


@dataclass(frozen=True)
class CartridgeInfo:
    """Decoded header information."""

    rom_source: Any
    title: str
    cgb: bool
    sgb: bool
    rom_banks: int
    ram_banks: int


@dataclass(frozen=True)
class RawCartridgeHeader:
    """Header bytes at 0x0134..0x014F, undecoded."""

    rom_source: Any
    title: bytes
    cgb_flag: int
    license_code: int
    sgb_flag: int
    cartridge_type: int
    rom_size: int
    ram_size: int
    old_license_code: int
    mask_rom_version_number: int
    header_checksum: int
    global_checksum: int

    @classmethod
    def from_rom(cls, rom: bytes, rom_source: Any = None) -> RawCartridgeHeader:
        if len(rom) < _HEADER_END:
            raise ValueError(f"ROM of {len(rom)} bytes is too short to hold a header")
        return cls(
            rom_source=rom_source,
            title=bytes(rom[0x0134:0x0143]),
            cgb_flag=rom[0x0143],
            license_code=(rom[0x0144] << 8) | rom[0x0145],
            sgb_flag=rom[0x0146],
            cartridge_type=rom[0x0147],
            rom_size=rom[0x0148],
            ram_size=rom[0x0149],
            old_license_code=rom[0x014B],
            mask_rom_version_number=rom[0x014C],
            header_checksum=rom[0x014D],
            global_checksum=(rom[0x014E] << 8) | rom[0x014F],
        )

    def _rom_banks(self) -> int:
        if 0 <= self.rom_size < 0x09:
            return 2 * (1 << self.rom_size)
        raise CartridgeParseError(CartridgeParseError.Kind.ROM_SIZE, f"0x{self.rom_size:02X}")

    def _ram_banks(self) -> int:
        try:
            return _RAM_BANKS_BY_CODE[self.ram_size]
        except KeyError:
            raise CartridgeParseError(
                CartridgeParseError.Kind.RAM_SIZE, f"0x{self.ram_size:02X}"
            ) from None

    def parse(self) -> CartridgeInfo:
        try:
            title = self.title.decode("utf-8")
        except UnicodeDecodeError as error:
            raise CartridgeParseError(CartridgeParseError.Kind.TITLE) from error
        return CartridgeInfo(
            rom_source=self.rom_source,
            title=title,
            cgb=self.cgb_flag in (0x80, 0xC0),
            sgb=self.sgb_flag == 0x03,
            rom_banks=self._rom_banks(),
            ram_banks=self._ram_banks(),
        )


def create_rom_banks(banks: int, raw_data: bytes) -> list[bytes]:
    """Split ROM data into the given number of 16 KiB banks."""
    needed = banks * ROM_BANK_SIZE
    if len(raw_data) < needed:
        raise ValueError(f"ROM holds {len(raw_data)} bytes but {banks} banks need {needed}")
    return [
        bytes(raw_data[start : start + ROM_BANK_SIZE])
        for start in range(0, needed, ROM_BANK_SIZE)
    ]


@dataclass
class CartridgeData:
    """ROM banks, which are read-only, and switchable RAM banks."""

    rom_banks: list[bytes] = field(default_factory=list)
    ram_banks: list[bytearray] = field(default_factory=list)
    loaded: bool = False

    @classmethod
    def from_rom(cls, raw_data: bytes, rom_banks: int, ram_banks: int) -> CartridgeData:
        return cls(
            rom_banks=create_rom_banks(rom_banks, raw_data),
            ram_banks=[bytearray(RAM_BANK_SIZE) for _ in range(ram_banks)],
            loaded=True,
        )