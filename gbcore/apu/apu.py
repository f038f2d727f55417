"""Audio processing unit: four channels, a mixer and the NR5x control registers."""

from __future__ import annotations

import logging

from ..cgb import Speed
from .channels import Noise, Square, Wave
from .units import FrameSequencer, TickResult

__all__ = ["Apu", "register_name"]

_log = logging.getLogger(__name__)

_BIT_4 = 0x10
_BIT_5 = 0x20
_BIT_7 = 0x80

_NR50 = 0xFF24
_NR51 = 0xFF25
_NR52 = 0xFF26
_PCM12 = 0xFF76
_PCM34 = 0xFF77
_WAVE_RAM_START = 0xFF30
_WAVE_RAM_END = 0xFF40

_LOW_PASS_FACTOR = 16.0

_REGISTER_NAMES = {
    0xFF10: "nr10",
    0xFF11: "nr11",
    0xFF12: "nr12",
    0xFF13: "nr13",
    0xFF14: "nr14",
    0xFF15: "nr20",
    0xFF16: "nr21",
    0xFF17: "nr22",
    0xFF18: "nr23",
    0xFF19: "nr24",
    0xFF1A: "nr30",
    0xFF1B: "nr31",
    0xFF1C: "nr32",
    0xFF1D: "nr33",
    0xFF1E: "nr34",
    0xFF1F: "nr40",
    0xFF20: "nr41",
    0xFF21: "nr42",
    0xFF22: "nr43",
    0xFF23: "nr44",
    0xFF24: "nr50",
    0xFF25: "nr51",
    0xFF26: "nr52",
}

# Bits that read back as 1 regardless of the register contents.
_UNUSED_MASKS = {
    0xFF10: 0x80,
    0xFF11: 0x3F,
    0xFF12: 0x00,
    0xFF13: 0xFF,
    0xFF14: 0xBF,
    0xFF15: 0xFF,
    0xFF16: 0x3F,
    0xFF17: 0x00,
    0xFF18: 0xFF,
    0xFF19: 0xBF,
    0xFF1A: 0x7F,
    0xFF1B: 0xFF,
    0xFF1C: 0x9F,
    0xFF1D: 0xFF,
    0xFF1E: 0xBF,
    0xFF1F: 0xFF,
    0xFF20: 0xFF,
    0xFF21: 0x00,
    0xFF22: 0x00,
    0xFF23: 0xBF,
    0xFF24: 0x00,
    0xFF25: 0x00,
    0xFF26: 0x70,
}


def register_name(addr: int) -> str:
    """Readable name of a sound register, or the address in hex."""
    return _REGISTER_NAMES.get(addr, f"0x{addr:X}")


def _unused_mask(addr: int) -> int:
    mask = _UNUSED_MASKS.get(addr)
    if mask is not None:
        return mask
    if 0xFF27 <= addr < 0xFF30:
        return 0xFF
    return 0x00


def _falling_edge(previous: int, current: int, mask: int) -> bool:
    return previous & mask != 0 and current & mask == 0


class Apu:
    """The sound hardware, addressed through 0xFF10..0xFF3F."""

    def __init__(self) -> None:
        self.prev_div = 0
        self.frame_sequencer = FrameSequencer()
        self.square1 = Square.sweeper()
        self.square2 = Square()
        self.wave = Wave()
        self.noise = Noise()
        self.nr50 = 0
        self.nr51 = 0
        self.power_on = False
        self.last_sample = (0.0, 0.0)

    @property
    def _channels(self) -> tuple[Square, Square, Wave, Noise]:
        return self.square1, self.square2, self.wave, self.noise

    def step_t_state(self, div: int, speed: Speed) -> None:
        """Advance one T-state given the current DIV register value."""
        if not self.power_on:
            self.prev_div = div
            return

        mask = _BIT_5 if speed is Speed.DOUBLE else _BIT_4
        clock_sequencer = _falling_edge(self.prev_div, div, mask)
        self.prev_div = div

        for channel in self._channels:
            if channel.enabled:
                channel.tick()

        if clock_sequencer:
            self._step_frame_sequencer()

    def _step_frame_sequencer(self) -> None:
        result = self.frame_sequencer.tick()
        if result is TickResult.LENGTH_CTRL:
            self._tick_length_ctr()
        elif result is TickResult.VOLUME_ENV:
            self._tick_vol_env()
        elif result is TickResult.LENGTH_CTRL_AND_SWEEP:
            self._tick_length_ctr()
            self.square1.tick_sweep()

    def _tick_length_ctr(self) -> None:
        for channel in self._channels:
            channel.tick_length_ctr()

    def _tick_vol_env(self) -> None:
        for channel in self._channels:
            channel.tick_vol_env()

    def _master_volume(self) -> tuple[float, float]:
        left = self.nr50 & 0b111
        right = (self.nr50 >> 4) & 0b111
        return (left + 1) / 15.0, (right + 1) / 15.0

    def _channel_enabled_lr(self, index: int) -> tuple[float, float]:
        left = 1.0 if self.nr51 & (1 << index) else 0.0
        right = 1.0 if self.nr51 & (1 << (index + 4)) else 0.0
        return left, right

    def _sample_mixer(self) -> tuple[float, float]:
        left = right = 0.0
        for index, channel in enumerate(self._channels):
            value = channel.sample_with_volume()
            on_left, on_right = self._channel_enabled_lr(index)
            left += on_left * value
            right += on_right * value

        last_left, last_right = self.last_sample
        left = (left + last_left * (_LOW_PASS_FACTOR - 1.0)) / _LOW_PASS_FACTOR
        right = (right + last_right * (_LOW_PASS_FACTOR - 1.0)) / _LOW_PASS_FACTOR
        self.last_sample = (left, right)
        return left / 4.0, right / 4.0

    def sample(self) -> tuple[float, float]:
        """Current stereo output, low-pass filtered and scaled by NR50."""
        volume_left, volume_right = self._master_volume()
        left, right = self._sample_mixer()
        return left * volume_left, right * volume_right

    def _set_power_state(self, on: bool) -> None:
        self.power_on = on
        if not on:
            for channel in self._channels:
                channel.reset()
            self.nr50 = 0
            self.nr51 = 0

    def _read_nr52(self) -> int:
        if not self.power_on:
            return 0
        status = _BIT_7
        for index, channel in enumerate(self._channels):
            if channel.enabled:
                status |= 1 << index
        return status

    def _channel_for(self, addr: int) -> tuple[Square | Wave | Noise, int] | None:
        if 0xFF10 <= addr <= 0xFF23:
            offset = addr - 0xFF10
            return self._channels[offset // 5], offset % 5
        return None

    def read(self, addr: int) -> int:
        mask = _unused_mask(addr)
        located = self._channel_for(addr)
        if located is not None:
            channel, register = located
            readers = (
                channel.read_nrx0,
                channel.read_nrx1,
                channel.read_nrx2,
                channel.read_nrx3,
                channel.read_nrx4,
            )
            result = readers[register]()
        elif addr == _NR50:
            result = self.nr50
        elif addr == _NR51:
            result = self.nr51
        elif addr == _NR52:
            result = self._read_nr52()
        elif addr == _PCM12:
            result = ((self.square2.sample() << 4) | self.square1.sample()) & 0xFF
        elif addr == _PCM34:
            result = (self.noise.sample() << 4) & 0xFF
        elif _WAVE_RAM_START <= addr < _WAVE_RAM_END:
            result = self.wave.wave_ram[addr - _WAVE_RAM_START]
        else:
            _log.warning("Apu read from unhandled address: 0x%X", addr)
            result = 0x00

        value = (result | mask) & 0xFF
        _log.info("Apu read from address: %s, value: 0x%X", register_name(addr), value)
        return value

    def write(self, addr: int, value: int) -> None:
        if not self.power_on and addr != _NR52:
            _log.info(
                "Apu write to disabled apu: %s, value: 0x%X", register_name(addr), value
            )
            return

        located = self._channel_for(addr)
        if located is not None:
            channel, register = located
            if register == 4:
                channel.write_nrx4(value, self.frame_sequencer.next_result())
            else:
                writers = (
                    channel.write_nrx0,
                    channel.write_nrx1,
                    channel.write_nrx2,
                    channel.write_nrx3,
                )
                writers[register](value)
        elif addr == _NR50:
            self.nr50 = value
        elif addr == _NR51:
            self.nr51 = value
        elif addr == _NR52:
            self._set_power_state(value & _BIT_7 != 0)
        elif _WAVE_RAM_START <= addr < _WAVE_RAM_END:
            self.wave.wave_ram[addr - _WAVE_RAM_START] = value & 0xFF
        else:
            _log.warning("Apu write to unhandled address: 0x%X, value: 0x%X", addr, value)

        _log.info("Apu write to address: %s, value: 0x%X", register_name(addr), value)