import pytest

from gbcore.cartridge.cartridge import Cartridge, MbcKind, UnsupportedMapperError
from gbcore.cartridge.header import CartridgeParseError


def make_rom(cartridge_type, rom_size_code, bank_count, ram_size=0x00, title=b"DEMO"):
    rom = bytearray()
    for bank in range(bank_count):
        rom += bytes([bank]) * 0x4000
    rom[0x0134 : 0x0134 + len(title)] = title
    rom[0x0143:0x0150] = bytes(0x0150 - 0x0143)
    rom[0x0147] = cartridge_type
    rom[0x0148] = rom_size_code
    rom[0x0149] = ram_size
    return bytes(rom)


@pytest.mark.parametrize(
    "cartridge_type,kind",
    [
        (0x00, MbcKind.ROM),
        (0x03, MbcKind.MBC1),
        (0x06, MbcKind.MBC2),
        (0x09, MbcKind.ROM),
        (0x13, MbcKind.MBC3),
        (0x0C, MbcKind.MMM01),
        (0x1E, MbcKind.MBC5),
        (0x20, MbcKind.MBC6),
        (0x22, MbcKind.MBC7),
        (0xFE, MbcKind.HUC3),
        (0xFF, MbcKind.HUC1),
    ],
)
def test_cartridge_type_mapping(cartridge_type, kind):
    cart = Cartridge.from_bytes(make_rom(cartridge_type, 0x00, 2))
    assert cart.kind is kind


def test_unknown_cartridge_type():
    with pytest.raises(CartridgeParseError) as excinfo:
        Cartridge.from_bytes(make_rom(0x04, 0x00, 2))
    assert excinfo.value.kind is CartridgeParseError.Kind.MBC_TYPE


def test_info_and_source_kept():
    cart = Cartridge.from_bytes(make_rom(0x00, 0x00, 2, title=b"DEMO"), "origin")
    assert cart.info.title.rstrip("\x00") == "DEMO"
    assert cart.info.rom_source == "origin"


def test_plain_rom_reads_and_ignores_writes():
    cart = Cartridge.from_bytes(make_rom(0x00, 0x00, 2))
    assert cart.read(0x4000) == 1
    assert cart.read(0x0000) == 0
    cart.write(0x4000, 9)
    assert cart.read(0x4000) == 1
    assert cart.read(0xA000) == 0xFF


def test_mbc1_rom_switching():
    cart = Cartridge.from_bytes(make_rom(0x01, 0x01, 4))
    assert cart.read(0x4000) == 1
    cart.write(0x2000, 3)
    assert cart.read(0x4000) == 3
    cart.write(0x2000, 0)
    assert cart.read(0x4000) == 1


def test_mbc1_ram_requires_enable():
    cart = Cartridge.from_bytes(make_rom(0x03, 0x01, 4, ram_size=0x02))
    assert cart.read(0xA000) == 0xFF
    cart.write(0xA000, 0x42)
    cart.write(0x0000, 0x0A)
    assert cart.read(0xA000) == 0
    cart.write(0xA000, 0x42)
    assert cart.read(0xA000) == 0x42
    cart.write(0x0000, 0x00)
    assert cart.read(0xA000) == 0xFF


def test_mbc1_unmapped_address():
    cart = Cartridge.from_bytes(make_rom(0x01, 0x01, 4))
    with pytest.raises(ValueError):
        cart.read(0x9000)
    with pytest.raises(ValueError):
        cart.write(0x9000, 1)


def test_mbc2_ram_reads_high_nibble_set_and_mirrors():
    cart = Cartridge.from_bytes(make_rom(0x06, 0x01, 4))
    assert cart.read(0xA000) == 0xFF
    cart.write(0x0000, 0x0A)
    cart.write(0xA000, 0x05)
    assert cart.read(0xA000) == 0xF5
    assert cart.read(0xA200) == cart.read(0xA000)


def test_mbc2_rom_switching():
    cart = Cartridge.from_bytes(make_rom(0x05, 0x01, 4))
    cart.write(0x0100, 2)
    assert cart.read(0x4000) == 2


def test_mbc3_rom_and_ram():
    cart = Cartridge.from_bytes(make_rom(0x13, 0x01, 4, ram_size=0x03))
    cart.write(0x2000, 2)
    assert cart.read(0x4000) == 2
    cart.write(0x2000, 0)
    assert cart.read(0x4000) == 1
    cart.write(0x4000, 1)
    cart.write(0xA010, 0x33)
    assert cart.read(0xA010) == 0x33
    cart.write(0x4000, 0)
    assert cart.read(0xA010) == 0


def test_mbc3_rtc_mode_reads_zero():
    cart = Cartridge.from_bytes(make_rom(0x13, 0x01, 4, ram_size=0x02))
    cart.write(0xA000, 0x77)
    assert cart.read(0xA000) == 0x77
    cart.write(0x4000, 0x08)
    assert cart.read(0xA000) == 0
    cart.write(0xA000, 0x11)
    cart.write(0x4000, 0x00)
    assert cart.read(0xA000) == 0x77


def test_mbc5_rom_and_ram():
    cart = Cartridge.from_bytes(make_rom(0x19, 0x01, 4, ram_size=0x03))
    cart.write(0x2000, 2)
    assert cart.read(0x4000) == 2
    assert cart.read(0xA000) == 0xFF
    cart.write(0x0000, 0x0A)
    cart.write(0x4000, 1)
    cart.write(0xA001, 0x5A)
    assert cart.read(0xA001) == 0x5A
    cart.write(0x4000, 0)
    assert cart.read(0xA001) == 0


def test_unsupported_mapper_raises():
    cart = Cartridge.from_bytes(make_rom(0x20, 0x00, 2))
    with pytest.raises(UnsupportedMapperError):
        cart.read(0x0000)
    with pytest.raises(UnsupportedMapperError):
        cart.write(0x0000, 0)