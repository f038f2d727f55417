"""A loaded cartridge: bank storage plus the memory bank controller in front of it."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Union

from .banking import MBC1State, MBC2State, MBC3BankingMode, MBC3State, MBC5State
from .header import CartridgeData, CartridgeInfo, CartridgeParseError, RawCartridgeHeader

__all__ = ["MbcKind", "UnsupportedMapperError", "Cartridge"]

MbcState = Union[MBC1State, MBC2State, MBC3State, MBC5State, None]

_MBC2_RAM_SIZE = 512


class MbcKind(enum.Enum):
    ROM = "ROM"
    MBC1 = "MBC1"
    MBC2 = "MBC2"
    MBC3 = "MBC3"
    MBC5 = "MBC5"
    MBC6 = "MBC6"
    MMM01 = "MMM01"
    MBC7 = "MBC7"
    HUC3 = "HUC3"
    HUC1 = "HUC1"


class UnsupportedMapperError(NotImplementedError):
    """The cartridge uses a controller whose banking is not emulated."""


def _kind_for(cartridge_type: int) -> MbcKind:
    if cartridge_type in (0x00, 0x08, 0x09):
        return MbcKind.ROM
    if 0x01 <= cartridge_type <= 0x03:
        return MbcKind.MBC1
    if cartridge_type in (0x05, 0x06):
        return MbcKind.MBC2
    if 0x0F <= cartridge_type <= 0x13:
        return MbcKind.MBC3
    if 0x0B <= cartridge_type <= 0x0D:
        return MbcKind.MMM01
    if 0x19 <= cartridge_type <= 0x1E:
        return MbcKind.MBC5
    special = {0x20: MbcKind.MBC6, 0x22: MbcKind.MBC7, 0xFE: MbcKind.HUC3, 0xFF: MbcKind.HUC1}
    try:
        return special[cartridge_type]
    except KeyError:
        raise CartridgeParseError(
            CartridgeParseError.Kind.MBC_TYPE, f"0x{cartridge_type:02X}"
        ) from None


_STATE_FACTORIES = {
    MbcKind.MBC1: MBC1State,
    MbcKind.MBC2: MBC2State,
    MbcKind.MBC3: MBC3State,
    MbcKind.MBC5: MBC5State,
}


def _is_rom(addr: int) -> bool:
    return 0x0000 <= addr < 0x8000


def _is_ram(addr: int) -> bool:
    return 0xA000 <= addr < 0xC000


def _bad_address(kind: MbcKind, addr: int) -> ValueError:
    return ValueError(f"{kind.value} has nothing mapped at 0x{addr:04X}")


@dataclass
class Cartridge:
    """Cartridge ROM/RAM reached through 0x0000..0x7FFF and 0xA000..0xBFFF."""

    data: CartridgeData
    kind: MbcKind
    state: MbcState
    info: CartridgeInfo

    @classmethod
    def from_bytes(cls, value: bytes, source: Any = None) -> Cartridge:
        """Parse the header and build the cartridge it describes."""
        header = RawCartridgeHeader.from_rom(value, source)
        info = header.parse()
        data = CartridgeData.from_rom(value, info.rom_banks, info.ram_banks)
        kind = _kind_for(header.cartridge_type)
        factory = _STATE_FACTORIES.get(kind)
        state = factory() if factory is not None else None
        return cls(data, kind, state, info)

    def _unsupported(self) -> UnsupportedMapperError:
        return UnsupportedMapperError(f"{self.kind.value} cartridges are not supported")

    def _fixed_rom(self, addr: int) -> int:
        return self.data.rom_banks[0][addr]

    def _banked_ram(self, bank: int, enabled: bool) -> int | None:
        """Index of the RAM bank to use, or None when RAM is absent or disabled."""
        banks = self.data.ram_banks
        if not banks or not enabled:
            return None
        return bank % len(banks)

    def read(self, addr: int) -> int:
        state = self.state
        rom_banks = self.data.rom_banks

        if self.kind is MbcKind.ROM:
            if 0x0000 <= addr < 0x4000:
                return rom_banks[0][addr]
            if 0x4000 <= addr < 0x8000:
                return rom_banks[1][addr - 0x4000]
            return 0xFF

        if isinstance(state, MBC1State):
            if 0x0000 <= addr < 0x4000:
                return rom_banks[state.zero_rom_bank() % len(rom_banks)][addr]
            if 0x4000 <= addr < 0x8000:
                return rom_banks[state.rom_bank() % len(rom_banks)][addr - 0x4000]
            if _is_ram(addr):
                bank = self._banked_ram(state.ram_bank(), state.ram_enabled)
                return 0xFF if bank is None else self.data.ram_banks[bank][addr - 0xA000]
            raise _bad_address(self.kind, addr)

        if isinstance(state, MBC2State):
            if 0x0000 <= addr < 0x4000:
                return self._fixed_rom(addr)
            if 0x4000 <= addr < 0x8000:
                return rom_banks[state.rom_bank % len(rom_banks)][addr - 0x4000]
            if _is_ram(addr):
                if not state.ram_enabled:
                    return 0xFF
                return state.ram_data[(addr - 0xA000) % _MBC2_RAM_SIZE] | 0xF0
            raise _bad_address(self.kind, addr)

        if isinstance(state, MBC3State):
            if 0x0000 <= addr < 0x4000:
                return self._fixed_rom(addr)
            if 0x4000 <= addr < 0x8000:
                return rom_banks[state.effective_rom_bank()][addr - 0x4000]
            if _is_ram(addr):
                if state.banking_mode is MBC3BankingMode.RTC:
                    return 0
                return self.data.ram_banks[state.ram_bank][addr - 0xA000]
            raise _bad_address(self.kind, addr)

        if isinstance(state, MBC5State):
            if 0x0000 <= addr < 0x4000:
                return self._fixed_rom(addr)
            if 0x4000 <= addr < 0x8000:
                return rom_banks[state.rom_bank % len(rom_banks)][addr - 0x4000]
            if _is_ram(addr):
                bank = self._banked_ram(state.ram_bank, state.ram_enabled)
                return 0xFF if bank is None else self.data.ram_banks[bank][addr - 0xA000]
            raise _bad_address(self.kind, addr)

        raise self._unsupported()

    def write(self, addr: int, value: int) -> None:
        state = self.state
        value &= 0xFF

        if self.kind is MbcKind.ROM:
            return

        if isinstance(state, MBC1State):
            if 0x0000 <= addr < 0x2000:
                state.set_ram_enable(value)
            elif 0x2000 <= addr < 0x4000:
                state.set_rom_bank(value)
            elif 0x4000 <= addr < 0x6000:
                state.set_ram_bank(value)
            elif 0x6000 <= addr < 0x8000:
                state.set_banking_mode(value)
            elif _is_ram(addr):
                bank = self._banked_ram(state.ram_bank(), state.ram_enabled)
                if bank is not None:
                    self.data.ram_banks[bank][addr - 0xA000] = value
            else:
                raise _bad_address(self.kind, addr)
            return

        if isinstance(state, MBC2State):
            if 0x0000 <= addr < 0x4000:
                state.set_register(addr, value)
            elif _is_ram(addr) and state.ram_enabled:
                state.ram_data[(addr - 0xA000) % _MBC2_RAM_SIZE] = value | 0xF0
            return

        if isinstance(state, MBC3State):
            if 0x0000 <= addr < 0x2000:
                state.ram_enabled = value == 0x0A
            elif 0x2000 <= addr < 0x4000:
                state.rom_bank = value
            elif 0x4000 <= addr < 0x6000:
                state.write_register(value)
            elif _is_ram(addr) and state.banking_mode is MBC3BankingMode.RAM:
                self.data.ram_banks[state.ram_bank][addr - 0xA000] = value
            return

        if isinstance(state, MBC5State):
            if 0x0000 <= addr < 0x2000:
                state.set_ram_enable(value)
            elif 0x2000 <= addr < 0x3000:
                state.set_rom_bank(value)
            elif 0x3000 <= addr < 0x4000:
                state.set_rom_bank_upper(value)
            elif 0x4000 <= addr < 0x6000:
                state.set_ram_bank(value)
            elif 0x6000 <= addr < 0x8000:
                pass
            elif _is_ram(addr):
                bank = self._banked_ram(state.ram_bank, state.ram_enabled)
                if bank is not None:
                    self.data.ram_banks[bank][addr - 0xA000] = value
            else:
                raise _bad_address(self.kind, addr)
            return

        raise self._unsupported()