import pytest

from gbcore.apu.apu import Apu, register_name
from gbcore.cgb import Speed

NR12 = 0xFF12
NR11 = 0xFF11
NR14 = 0xFF14
NR50 = 0xFF24
NR51 = 0xFF25
NR52 = 0xFF26


@pytest.fixture
def powered() -> Apu:
    apu = Apu()
    apu.write(NR52, 0x80)
    return apu


def test_powered_off_nr52_reads_unused_bits_only():
    assert Apu().read(NR52) == 0x70


def test_writes_ignored_while_powered_off():
    apu = Apu()
    apu.write(NR50, 0x77)
    assert apu.read(NR50) == 0x00


def test_power_on_sets_status_bit(powered):
    assert powered.read(NR52) == 0x80 | 0x70


def test_nr50_nr51_round_trip(powered):
    powered.write(NR50, 0x35)
    powered.write(NR51, 0xA5)
    assert powered.read(NR50) == 0x35
    assert powered.read(NR51) == 0xA5


def test_power_off_clears_master_registers(powered):
    powered.write(NR50, 0x77)
    powered.write(NR52, 0x00)
    powered.write(NR52, 0x80)
    assert powered.read(NR50) == 0x00


def test_unused_register_range_reads_ff(powered):
    assert powered.read(0xFF27) == 0xFF
    assert powered.read(0xFF2F) == 0xFF


@pytest.mark.parametrize("offset", [0, 7, 15])
def test_wave_ram_round_trip(powered, offset):
    powered.write(0xFF30 + offset, 0xA7)
    assert powered.read(0xFF30 + offset) == 0xA7


def test_trigger_square1_shows_in_nr52(powered):
    powered.write(NR12, 0xF0)
    powered.write(NR14, 0x80)
    assert powered.read(NR52) & 0x01 == 0x01
    assert powered.read(NR52) & 0x0E == 0


def test_nr11_duty_and_unused_bits(powered):
    powered.write(NR11, 0x80)
    value = powered.read(NR11)
    assert value & 0x3F == 0x3F
    assert value >> 6 == 2


def test_sample_silent_when_powered_off():
    assert Apu().sample() == (0.0, 0.0)


def test_sample_positive_with_triggered_square(powered):
    powered.write(NR50, 0x77)
    powered.write(NR51, 0xFF)
    powered.write(NR12, 0xF0)
    powered.write(NR14, 0x80)
    left, right = powered.sample()
    assert left == right
    assert left > 0.0


def test_frame_sequencer_clocks_on_falling_edge_normal_speed(powered):
    powered.step_t_state(0x10, Speed.NORMAL)
    powered.step_t_state(0x00, Speed.NORMAL)
    assert powered.frame_sequencer.value == 1


def test_double_speed_uses_bit_5(powered):
    powered.step_t_state(0x10, Speed.DOUBLE)
    powered.step_t_state(0x00, Speed.DOUBLE)
    assert powered.frame_sequencer.value == 0
    powered.step_t_state(0x20, Speed.DOUBLE)
    powered.step_t_state(0x00, Speed.DOUBLE)
    assert powered.frame_sequencer.value == 1


def test_powered_off_does_not_clock_sequencer():
    apu = Apu()
    apu.step_t_state(0x10, Speed.NORMAL)
    apu.step_t_state(0x00, Speed.NORMAL)
    assert apu.frame_sequencer.value == 0


def test_register_names():
    assert register_name(0xFF10) == "nr10"
    assert register_name(0xFF26) == "nr52"
    assert register_name(0xFF30) == "0xFF30"