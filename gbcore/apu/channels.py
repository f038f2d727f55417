"""The four sound generators: two square channels, the wave channel and noise."""

from __future__ import annotations

import abc
import enum

from .units import (
    FrameSequencer,
    LengthCounter,
    Lfsr,
    Sweep,
    TickResult,
    Timer,
    VolumeEnvelope,
)

__all__ = ["Channel", "Square", "VolumeCode", "Wave", "Noise", "FrameSequencer"]

_U8 = 0xFF
_U16 = 0xFFFF
_BIT_3 = 0x08
_BIT_6 = 0x40
_BIT_7 = 0x80

# Frame-sequencer steps that fall in the first half of a length period.
_FIRST_HALF_RESULTS = frozenset({TickResult.NONE, TickResult.VOLUME_ENV})


class Channel(abc.ABC):
    """A sound generator addressed through the NRx0..NRx4 registers."""

    @abc.abstractmethod
    def write_nrx0(self, value: int) -> None: ...

    @abc.abstractmethod
    def read_nrx0(self) -> int: ...

    @abc.abstractmethod
    def write_nrx1(self, value: int) -> None: ...

    @abc.abstractmethod
    def read_nrx1(self) -> int: ...

    @abc.abstractmethod
    def write_nrx2(self, value: int) -> None: ...

    @abc.abstractmethod
    def read_nrx2(self) -> int: ...

    @abc.abstractmethod
    def write_nrx3(self, value: int) -> None: ...

    @abc.abstractmethod
    def read_nrx3(self) -> int: ...

    @abc.abstractmethod
    def write_nrx4(self, value: int, next_result: TickResult) -> None: ...

    @abc.abstractmethod
    def read_nrx4(self) -> int: ...

    @abc.abstractmethod
    def tick(self) -> None: ...

    @abc.abstractmethod
    def tick_sweep(self) -> None: ...

    @abc.abstractmethod
    def tick_length_ctr(self) -> None: ...

    @abc.abstractmethod
    def tick_vol_env(self) -> None: ...

    @abc.abstractmethod
    def sample(self) -> int: ...

    @abc.abstractmethod
    def reset(self) -> None: ...

    @property
    @abc.abstractmethod
    def volume(self) -> int: ...

    @property
    @abc.abstractmethod
    def enabled(self) -> bool: ...

    def sample_with_volume(self) -> float:
        """Current output scaled into the range -1.0 to 1.0."""
        if not self.enabled:
            return 0.0
        sample = float((self.sample() * 2) & _U8) - 1.0
        return sample * (self.volume / 15.0)


class Square(Channel):
    """Square wave channel, optionally with a frequency sweep unit."""

    DUTY = (0b0000_0001, 0b1000_0001, 0b1000_0111, 0b0111_1110)

    def __init__(self, sweeper: bool = False) -> None:
        self.has_sweep = sweeper
        self._enabled = False
        self.length_counter = LengthCounter()
        self.volume_envelope = VolumeEnvelope()
        self.frequency_timer = Timer()
        self.frequency = 0
        self.duty_cycle = 0
        self.duty_index = 0
        self.sweep = Sweep()

    @classmethod
    def sweeper(cls) -> Square:
        """A square channel with the sweep unit, as used for channel 1."""
        return cls(sweeper=True)

    def _timer_period(self) -> int:
        return ((2048 - self.frequency) * 4) & _U16

    def write_nrx0(self, value: int) -> None:
        if self.has_sweep:
            self.sweep.write_byte(value)

    def read_nrx0(self) -> int:
        return self.sweep.read_byte() if self.has_sweep else 0

    def write_nrx1(self, value: int) -> None:
        self.length_counter.reload(value & 0b0011_1111)
        self.duty_index = (value >> 6) & 0b11

    def read_nrx1(self) -> int:
        return ((self.duty_index << 6) | self.length_counter.length) & _U8

    def write_nrx2(self, value: int) -> None:
        self.volume_envelope.write_byte(value)
        if not self.volume_envelope.dac_enabled:
            self._enabled = False

    def read_nrx2(self) -> int:
        return self.volume_envelope.read_byte()

    def write_nrx3(self, value: int) -> None:
        self.frequency = (self.frequency & 0x0700) | (value & _U8)
        self.frequency_timer.period = self._timer_period()

    def read_nrx3(self) -> int:
        return self.frequency & 0x00FF

    def write_nrx4(self, value: int, next_result: TickResult) -> None:
        trigger = value & _BIT_7 == _BIT_7
        length_enable = value & _BIT_6 == _BIT_6

        length_previously_enabled = self.length_counter.enabled
        self.length_counter.enabled = length_enable

        if trigger:
            self.length_counter.unfreeze()
            self._enabled = True
            if self.has_sweep:
                self.sweep.trigger(self.frequency)
            self.frequency = (self.frequency & 0x00FF) | ((value & 0b111) << 8)
            self.frequency_timer.period = self._timer_period()

        # Enabling the length counter in the first half of a length period clocks it once.
        in_first_half = next_result in _FIRST_HALF_RESULTS
        if not length_previously_enabled and self.length_counter.enabled and in_first_half:
            self.tick_length_ctr()

    def read_nrx4(self) -> int:
        trigger = int(self._enabled) << 7
        length_enable = int(self.length_counter.enabled) << 6
        return trigger | length_enable | ((self.frequency >> 8) & _U8)

    def tick(self) -> None:
        if self.frequency_timer.tick():
            self.duty_cycle = (self.duty_cycle + 1) & 0x7

    @property
    def volume(self) -> int:
        return self.volume_envelope.volume

    def sample(self) -> int:
        return (self.DUTY[self.duty_index] >> self.duty_cycle) & 1

    @property
    def enabled(self) -> bool:
        return self._enabled and self.volume_envelope.dac_enabled

    def reset(self) -> None:
        if self.has_sweep:
            self.sweep.write_byte(0)
        self.duty_cycle = 0
        self.duty_index = 0
        self.volume_envelope.write_byte(0)
        self.length_counter.enabled = False
        self.length_counter.reload(0)
        self._enabled = False

    def tick_sweep(self) -> None:
        if not self.has_sweep:
            return
        disable, new_frequency = self.sweep.tick()
        if disable:
            self._enabled = False
        if new_frequency is not None:
            self.frequency = new_frequency

    def tick_length_ctr(self) -> None:
        if self.length_counter.tick():
            self._enabled = False

    def tick_vol_env(self) -> None:
        self.volume_envelope.tick()


class VolumeCode(enum.IntEnum):
    """Output level of the wave channel."""

    ZERO = 0
    ONE_HUNDRED = 1
    FIFTY = 2
    TWENTY_FIVE = 3

    def shift_amount(self) -> int:
        return _VOLUME_SHIFTS[self]


_VOLUME_SHIFTS = {
    VolumeCode.ZERO: 4,
    VolumeCode.ONE_HUNDRED: 0,
    VolumeCode.FIFTY: 1,
    VolumeCode.TWENTY_FIVE: 2,
}


class Wave(Channel):
    """Channel that plays 4-bit samples from wave RAM."""

    def __init__(self) -> None:
        self.dac_power = False
        self._enabled = False
        self.length_counter = LengthCounter(0)
        self.frequency_timer = Timer()
        self.volume_code = VolumeCode.ZERO
        self.frequency = 0
        self.position_counter = 0
        self.wave_ram = bytearray(32)

    def _timer_period(self) -> int:
        return ((2048 - self.frequency) * 2) & _U16

    def _nibble_at(self, position: int) -> int:
        byte = self.wave_ram[position // 2]
        shift = 4 if position & 1 == 0 else 0
        return (byte >> shift) & 0xF

    def sample_with_volume(self) -> float:
        if not self.enabled:
            return 0.0
        shift = self.volume_code.shift_amount()
        sample = (self._nibble_at(self.position_counter) << shift) & 0xF
        return (sample / 15.0) * 2.0 - 1.0

    def read_nrx0(self) -> int:
        return _BIT_7 if self.dac_power else 0

    def write_nrx0(self, value: int) -> None:
        self.dac_power = value & _BIT_7 != 0
        if not self.dac_power:
            self._enabled = False

    def write_nrx1(self, value: int) -> None:
        self.length_counter.reload(value)

    def read_nrx1(self) -> int:
        return self.length_counter.length

    def write_nrx2(self, value: int) -> None:
        self.volume_code = VolumeCode((value & 0b0110_0000) >> 5)

    def read_nrx2(self) -> int:
        return int(self.volume_code) << 5

    def write_nrx3(self, value: int) -> None:
        self.frequency = (self.frequency & 0x0700) | (value & _U8)
        self.frequency_timer.period = self._timer_period()

    def read_nrx3(self) -> int:
        return self.frequency & 0x00FF

    def write_nrx4(self, value: int, next_result: TickResult) -> None:
        trigger = value & _BIT_7 == _BIT_7
        self.length_counter.enabled = value & _BIT_6 == _BIT_6

        if trigger and self.dac_power:
            self._enabled = True

        self.frequency = (self.frequency & 0x00FF) | ((value & 0b111) << 8)
        self.frequency_timer.period = self._timer_period()

    def read_nrx4(self) -> int:
        trigger = _BIT_7 if self._enabled else 0
        length = _BIT_6 if self.length_counter.enabled else 0
        return trigger | length | ((self.frequency >> 8) & _U8)

    def tick(self) -> None:
        if self.frequency_timer.tick():
            self.position_counter = (self.position_counter + 1) & 63

    @property
    def volume(self) -> int:
        return 15

    def sample(self) -> int:
        """Raw wave RAM byte at the position counter, shifted by the volume code."""
        shift = self.volume_code.shift_amount()
        return (self.wave_ram[self.position_counter] << shift) & _U8

    @property
    def enabled(self) -> bool:
        return self._enabled and self.dac_power

    def reset(self) -> None:
        self.volume_code = VolumeCode.ZERO
        self._enabled = False
        self.dac_power = False
        self.frequency = 0
        self.frequency_timer.reload()
        self.position_counter = 0
        self.length_counter.enabled = False
        self.length_counter.reload(0)

    def tick_length_ctr(self) -> None:
        if self.length_counter.tick():
            self._enabled = False

    def tick_sweep(self) -> None:
        pass

    def tick_vol_env(self) -> None:
        pass


_DIVISORS = (8, 16, 32, 48, 64, 80, 96, 112)


class Noise(Channel):
    """Pseudo-random noise channel driven by an LFSR."""

    def __init__(self) -> None:
        self.lfsr = Lfsr()
        self.volume_envelope = VolumeEnvelope()
        self._enabled = False
        self.clock_shift = 0
        self.divisor_code = 0
        self.frequency_timer = Timer(0)
        self.length_counter = LengthCounter()
        self.frequency_timer.period = self._timer_period()

    def _divisor(self) -> int:
        return _DIVISORS[self.divisor_code & 7]

    def _timer_period(self) -> int:
        return (self._divisor() << self.clock_shift) & _U16

    def write_nrx0(self, value: int) -> None:
        pass

    def read_nrx0(self) -> int:
        return 0xFF

    def write_nrx1(self, value: int) -> None:
        self.length_counter.reload(value & 0b0011_1111)

    def read_nrx1(self) -> int:
        return self.length_counter.length

    def write_nrx2(self, value: int) -> None:
        self.volume_envelope.write_byte(value)
        if not self.volume_envelope.dac_enabled:
            self._enabled = False

    def read_nrx2(self) -> int:
        return self.volume_envelope.read_byte()

    def write_nrx3(self, value: int) -> None:
        self.clock_shift = (value >> 4) & 0b1111
        self.divisor_code = value & 0b111
        self.frequency_timer.period = self._timer_period()
        self.lfsr.width = 6 if value & _BIT_3 == _BIT_3 else 14
        self.lfsr.reset()

    def read_nrx3(self) -> int:
        lfsr_mode = _BIT_3 if self.lfsr.width == 6 else 0
        return ((self.clock_shift << 4) | lfsr_mode | self.divisor_code) & _U8

    def write_nrx4(self, value: int, next_result: TickResult) -> None:
        trigger = value & _BIT_7 == _BIT_7
        self.length_counter.enabled = value & _BIT_6 == _BIT_6
        if trigger:
            self._enabled = True
            self.frequency_timer.reload()
            self.volume_envelope.reload()
            self.lfsr.reset()

    def read_nrx4(self) -> int:
        length_enable = int(self.length_counter.enabled) << 6
        trigger = int(self._enabled) << 7
        return length_enable | trigger

    def tick_length_ctr(self) -> None:
        if self.length_counter.tick():
            self._enabled = False

    def tick_vol_env(self) -> None:
        self.volume_envelope.tick()

    def tick(self) -> None:
        if self.frequency_timer.tick():
            self.lfsr.step()

    @property
    def enabled(self) -> bool:
        return self._enabled and self.volume_envelope.dac_enabled

    def sample(self) -> int:
        return (~self.lfsr.shift_register) & 1

    def reset(self) -> None:
        self.lfsr.reset()
        self.lfsr.width = 14
        self.clock_shift = 0
        self.divisor_code = 0
        self.length_counter.reload(0)
        self.volume_envelope.write_byte(0)
        self.length_counter.enabled = False
        self._enabled = False

    @property
    def volume(self) -> int:
        return self.volume_envelope.volume

    def tick_sweep(self) -> None:
        pass