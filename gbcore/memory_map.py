"""Names of the regions and registers in the 16-bit address space."""

from __future__ import annotations

import enum


class IORegister(enum.IntEnum):
    """Named I/O registers, valued by their address."""

    DIV = 0xFF04
    TIMA = 0xFF05
    TMA = 0xFF06
    TAC = 0xFF07
    NR10 = 0xFF10
    NR11 = 0xFF11
    NR12 = 0xFF12
    NR14 = 0xFF14
    NR21 = 0xFF16
    NR22 = 0xFF17
    NR24 = 0xFF19
    NR30 = 0xFF1A
    NR31 = 0xFF1B
    NR32 = 0xFF1C
    NR33 = 0xFF1E
    NR41 = 0xFF20
    NR42 = 0xFF21
    NR43 = 0xFF22
    NR44 = 0xFF23
    NR50 = 0xFF24
    NR51 = 0xFF25
    NR52 = 0xFF26
    LCDC = 0xFF40
    STAT = 0xFF41
    SCY = 0xFF42
    SCX = 0xFF43
    LY = 0xFF44
    LYC = 0xFF45
    DMA = 0xFF46
    BGP = 0xFF47
    OBP0 = 0xFF48
    OBP1 = 0xFF49
    WY = 0xFF4A
    WX = 0xFF4B
    SB = 0xFF01
    SC = 0xFF02
    IF = 0xFF0F


class AddressRange(enum.Enum):
    """Memory regions; named I/O registers are reported as IORegister instead."""

    ROM_BANK_0 = "RomBank0"
    ROM_BANK_N = "RomBankN"
    VRAM = "VRam"
    EXTERNAL_RAM = "ExternalRam"
    WRAM_BANK_0 = "WRamBank0"
    WRAM_BANK_N = "WRamBankN"
    MIRROR = "Mirror"
    SPRITE_ATTRIBUTES = "SpriteAttributes"
    UNUSABLE = "Unusable"
    IO_REGISTER_UNUSED = "IORegisterUnused"
    HIGH_RAM = "HighRam"
    INTERRUPT_ENABLE = "InterruptEnable"


_REGIONS = (
    (0x0000, 0x4000, AddressRange.ROM_BANK_0),
    (0x4000, 0x8000, AddressRange.ROM_BANK_N),
    (0x8000, 0xA000, AddressRange.VRAM),
    (0xA000, 0xC000, AddressRange.EXTERNAL_RAM),
    (0xC000, 0xD000, AddressRange.WRAM_BANK_0),
    (0xD000, 0xE000, AddressRange.WRAM_BANK_N),
    (0xE000, 0xFE00, AddressRange.MIRROR),
    (0xFE00, 0xFEA0, AddressRange.SPRITE_ATTRIBUTES),
    (0xFEA0, 0xFF00, AddressRange.UNUSABLE),
)

_IO_BY_ADDRESS = {register.value: register for register in IORegister}


def map_addr_to_named_range(addr: int) -> AddressRange | IORegister:
    """Name the region, or the I/O register, that an address belongs to."""
    if not 0 <= addr <= 0xFFFF:
        raise ValueError(f"address {addr:#X} is outside the 16-bit address space")
    for start, end, region in _REGIONS:
        if start <= addr < end:
            return region
    register = _IO_BY_ADDRESS.get(addr)
    if register is not None:
        return register
    if addr < 0xFF80:
        return AddressRange.IO_REGISTER_UNUSED
    if addr < 0xFFFE:
        return AddressRange.HIGH_RAM
    return AddressRange.INTERRUPT_ENABLE


def get_addr_info(addr: int) -> tuple[AddressRange | IORegister, str | None]:
    """Region of an address and an optional description."""
    return map_addr_to_named_range(addr), None