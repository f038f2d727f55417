import pytest

from gbcore.cartridge.banking import (
    MBC1State,
    MBC2State,
    MBC3BankingMode,
    MBC3State,
    MBC5State,
)


def test_mbc1_default_rom_bank_skips_zero():
    assert MBC1State().rom_bank() == 1


def test_mbc1_set_rom_bank_selects_bank():
    state = MBC1State()
    state.set_rom_bank(0x05)
    assert state.rom_bank() == 0x05


def test_mbc1_rom_bank_masks_to_five_bits():
    state = MBC1State()
    state.set_rom_bank(0x20)
    assert state.rom_bank() == 1


def test_mbc1_simple_mode_hides_upper_bits():
    state = MBC1State()
    state.set_ram_bank(2)
    assert state.ram_bank() == 0
    assert state.zero_rom_bank() == 0


def test_mbc1_complex_mode_uses_upper_bits():
    state = MBC1State()
    state.set_ram_bank(2)
    state.set_banking_mode(1)
    assert state.ram_bank() == 2
    assert state.zero_rom_bank() == 0x40


def test_mbc1_banking_mode_only_one_selects_complex():
    state = MBC1State()
    state.set_banking_mode(3)
    assert state.complex_mode is False
    state.set_banking_mode(1)
    assert state.complex_mode is True


def test_mbc1_rom_and_ram_bits_are_independent():
    state = MBC1State()
    state.set_ram_bank(3)
    state.set_rom_bank(0x07)
    state.set_banking_mode(1)
    assert state.ram_bank() == 3
    state.set_ram_bank(1)
    assert state.rom_bank() & 0x1F == 0x07


@pytest.mark.parametrize("value,enabled", [(0x0A, True), (0x1A, True), (0x0B, False), (0x00, False)])
def test_mbc1_ram_enable(value, enabled):
    state = MBC1State()
    state.set_ram_enable(value)
    assert state.ram_enabled is enabled


def test_mbc2_defaults():
    state = MBC2State()
    assert state.rom_bank == 1
    assert len(state.ram_data) == 512
    assert state.ram_enabled is False


def test_mbc2_register_selection_by_address_bit_8():
    state = MBC2State()
    state.set_register(0x0000, 0x0A)
    assert state.ram_enabled is True
    state.set_register(0x0100, 0x03)
    assert state.rom_bank == 3
    assert state.ram_enabled is True


def test_mbc2_zero_rom_bank_becomes_one():
    state = MBC2State()
    state.set_register(0x0100, 0x00)
    assert state.rom_bank == 1


def test_mbc3_effective_rom_bank():
    state = MBC3State()
    assert state.effective_rom_bank() == 1
    state.rom_bank = 7
    assert state.effective_rom_bank() == 7


def test_mbc3_write_register_modes():
    state = MBC3State()
    state.write_register(2)
    assert state.banking_mode is MBC3BankingMode.RAM
    assert state.ram_bank == 2
    state.write_register(0x08)
    assert state.banking_mode is MBC3BankingMode.RTC
    assert state.rtc_register == 0x08


def test_mbc3_write_register_ignores_other_values():
    state = MBC3State()
    state.write_register(0x05)
    assert state.banking_mode is MBC3BankingMode.RAM
    assert state.ram_bank == 0
    assert state.rtc_register == 0


def test_mbc5_rom_bank_bytes():
    state = MBC5State()
    assert state.rom_bank == 1
    state.set_rom_bank(0x34)
    assert state.rom_bank == 0x34
    state.set_rom_bank_upper(1)
    assert state.rom_bank == 0x134
    state.set_rom_bank_upper(0)
    assert state.rom_bank == 0x34


def test_mbc5_ram_bank_masked():
    state = MBC5State()
    state.set_ram_bank(0x1F)
    assert state.ram_bank == 0x0F


def test_mbc5_ram_enable():
    state = MBC5State()
    state.set_ram_enable(0x0A)
    assert state.ram_enabled is True
    state.set_ram_enable(0x00)
    assert state.ram_enabled is False