"""Small clocked units shared by the sound channels."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

_U8 = 0xFF
_U16 = 0xFFFF
_MAX_FREQUENCY = 2047


class Timer:
    """Down-counter that fires once every ``period + 1`` ticks.

    A period of zero disables the timer. Assigning ``period`` reloads it.
    """

    __slots__ = ("_counter", "_period")

    def __init__(self, period: int = 0) -> None:
        self._period = period
        self._counter = period

    @property
    def period(self) -> int:
        return self._period

    @period.setter
    def period(self, value: int) -> None:
        self._period = value
        self.reload()

    def tick(self) -> bool:
        """Advance one step; return True when the timer fires."""
        if self._period == 0:
            return False
        if self._counter == 0:
            self.reload()
            return True
        self._counter -= 1
        return False

    def reload(self) -> None:
        self._counter = self._period

    def __repr__(self) -> str:
        return f"Timer(period={self._period}, counter={self._counter})"


class LengthCounter:
    """Length counter clocked at 256 Hz by the frame sequencer."""

    def __init__(self, initial: int = 64) -> None:
        self.enabled = True
        self.frozen = False
        self.length = 0
        self.initial = initial

    @property
    def _mask(self) -> int:
        return (self.initial - 1) & _U8

    def reload(self, length: int) -> None:
        self.length = ((length - 1) & _U8) & self._mask
        self.unfreeze()

    def unfreeze(self) -> None:
        self.frozen = False

    def tick(self) -> bool:
        """Advance the counter; return True if the channel should be disabled."""
        if not self.enabled or self.frozen:
            return False
        self.length = ((self.length + 1) & _U8) & self._mask
        if self.length == 0:
            self.frozen = True
            return True
        return False


_SHIFT_REGISTER_INITIAL = 0x7FFF


@dataclass
class Lfsr:
    """Linear feedback shift register used by the noise channel."""

    shift_register: int = _SHIFT_REGISTER_INITIAL
    width: int = 14

    def reset(self) -> None:
        self.shift_register = _SHIFT_REGISTER_INITIAL

    def step(self) -> bool:
        """Shift once; return the inverse of the bit shifted out."""
        bit_0 = self.shift_register & 1
        bit_1 = (self.shift_register >> 1) & 1
        feedback = bit_0 ^ bit_1

        width_bit = 1 << self.width
        register = self.shift_register >> 1
        register &= ~width_bit & _U16
        register |= feedback << self.width
        self.shift_register = register & _U16

        return not bit_0


@dataclass
class Sweep:
    """Frequency sweep unit of the first square channel."""

    enabled: bool = False
    negate: bool = False
    shift: int = 0
    timer: Timer = field(default_factory=Timer)
    shadow_frequency: int = 0

    def trigger(self, frequency: int) -> None:
        self.timer.reload()
        self.shadow_frequency = frequency
        self.enabled = self.shift != 0 or self.timer.period != 0
        if self.shift != 0:
            # The overflow result is ignored here, only the shadow register changes.
            self._calculate()

    def _next_shadow_frequency(self) -> int:
        diff = self.shadow_frequency >> self.shift
        if self.negate:
            return (self.shadow_frequency - diff) & _U16
        return (self.shadow_frequency + diff) & _U16

    def tick(self) -> tuple[bool, int | None]:
        """Clock the sweep at 128 Hz.

        Returns whether the channel must be disabled and, if any, the new
        frequency to write back to the channel.
        """
        if not self.enabled:
            return False, None

        if self.timer.tick() and self.shift != 0:
            new_frequency = self._next_shadow_frequency()
            if new_frequency > _MAX_FREQUENCY:
                return True, None
            self.shadow_frequency = new_frequency
            overflow = self._next_shadow_frequency() > _MAX_FREQUENCY
            return overflow, new_frequency
        return False, None

    def write_byte(self, value: int) -> None:
        self.timer.period = (value & 0b0111_0000) >> 4
        self.negate = value & 0b1000 != 0
        self.shift = value & 0b0111

    def _calculate(self) -> bool:
        diff = self.shadow_frequency >> self.shift
        if self.negate:
            self.shadow_frequency = (self.shadow_frequency - diff) & _U16
        else:
            self.shadow_frequency = (self.shadow_frequency + diff) & _U16
        return self.shadow_frequency > _MAX_FREQUENCY

    def read_byte(self) -> int:
        period = (self.timer.period << 4) & _U8
        negate = int(self.negate) << 3
        return period | negate | self.shift


class Direction(enum.IntEnum):
    """Direction in which a volume envelope moves."""

    DECREASE = 0
    INCREASE = 1

    @property
    def step(self) -> int:
        return 1 if self is Direction.INCREASE else -1


@dataclass
class VolumeEnvelope:
    """Volume envelope of the square and noise channels."""

    initial_volume: int = 0
    direction: Direction = Direction.DECREASE
    volume: int = 0
    timer: Timer = field(default_factory=Timer)

    def read_byte(self) -> int:
        period = self.timer.period & _U8
        direction = int(self.direction) << 3
        initial_volume = (self.initial_volume << 4) & _U8
        return initial_volume | period | direction

    def write_byte(self, value: int) -> None:
        self.initial_volume = (value & _U8) >> 4
        self.timer.period = value & 0b111
        self.direction = Direction.INCREASE if value & 0b1000 else Direction.DECREASE
        self.reload()

    def tick(self) -> None:
        if self.timer.tick():
            new_volume = (self.volume + self.direction.step) & _U8
            if new_volume <= 0xF:
                self.volume = new_volume

    def reload(self) -> None:
        self.volume = self.initial_volume
        self.timer.reload()

    @property
    def dac_enabled(self) -> bool:
        return not (self.initial_volume == 0 and self.direction is Direction.DECREASE)


class TickResult(enum.Enum):
    """Which units a frame-sequencer step clocks."""

    NONE = enum.auto()
    LENGTH_CTRL = enum.auto()
    VOLUME_ENV = enum.auto()
    LENGTH_CTRL_AND_SWEEP = enum.auto()


_STEP_RESULTS = (
    TickResult.LENGTH_CTRL,
    TickResult.NONE,
    TickResult.LENGTH_CTRL_AND_SWEEP,
    TickResult.NONE,
    TickResult.LENGTH_CTRL,
    TickResult.NONE,
    TickResult.LENGTH_CTRL_AND_SWEEP,
    TickResult.VOLUME_ENV,
)


@dataclass
class FrameSequencer:
    """512 Hz sequencer that drives length, sweep and envelope units."""

    value: int = 0

    @staticmethod
    def _result_for(value: int) -> TickResult:
        return _STEP_RESULTS[value & 7]

    def next_result(self) -> TickResult:
        return self._result_for((self.value + 1) & _U8)

    def current_result(self) -> TickResult:
        return self._result_for(self.value)

    def tick(self) -> TickResult:
        self.value = (self.value + 1) & _U8
        return self.current_result()