"""Conversions between T-states, M-states, seconds and frames."""

from __future__ import annotations

import math
from dataclasses import dataclass

T_STATES_PER_SECOND = 4 * 1_048_576
T_STATES_PER_M_STATE = 4
T_STATES_PER_FRAME = 70224
_U64_MAX = 2**64 - 1


def _to_u64(value: float) -> int:
    """Truncate like a saturating float-to-unsigned cast."""
    if not value > 0:
        return 0
    if math.isinf(value):
        return _U64_MAX
    return min(int(value), _U64_MAX)


@dataclass(frozen=True, order=True)
class TStates:
    """A point in emulated time measured in T-states."""

    t_states: int = 0

    @classmethod
    def from_t_states(cls, t_states: int) -> TStates:
        return cls(t_states)

    @classmethod
    def from_seconds(cls, seconds: float) -> TStates:
        return cls(_to_u64(seconds * float(T_STATES_PER_SECOND)))

    @classmethod
    def from_m_states(cls, m_states: int) -> TStates:
        return cls(m_states * T_STATES_PER_M_STATE)

    @classmethod
    def from_frames(cls, frames: float) -> TStates:
        return cls(_to_u64(frames * float(T_STATES_PER_FRAME)))

    @property
    def seconds(self) -> float:
        return self.t_states / T_STATES_PER_SECOND

    @property
    def m_states(self) -> int:
        return self.t_states // T_STATES_PER_M_STATE

    @property
    def frames(self) -> float:
        return self.t_states / T_STATES_PER_FRAME

    def __int__(self) -> int:
        return self.t_states