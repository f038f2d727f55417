"""Buffering and resampling of the sound output."""

from __future__ import annotations

import math
from collections import deque
from typing import Protocol

__all__ = ["Audio", "SampleSource", "MAX_BUFFERED_SAMPLES", "T_STATES_PER_SAMPLE"]

MAX_BUFFERED_SAMPLES = 80_000
T_STATES_PER_SAMPLE = 4

Sample = tuple[float, float]


class SampleSource(Protocol):
    def sample(self) -> Sample: ...


class Audio:
    """Collects one stereo sample every four T-states."""

    def __init__(self) -> None:
        self._raw_samples: deque[Sample] = deque(maxlen=MAX_BUFFERED_SAMPLES)
        self._countdown = T_STATES_PER_SAMPLE

    def step(self, apu: SampleSource, t_states: int) -> None:
        """Advance by a number of T-states, sampling the APU as due."""
        remaining = t_states
        while remaining >= self._countdown:
            remaining -= self._countdown
            self._countdown = T_STATES_PER_SAMPLE
            self._raw_samples.append(apu.sample())
        self._countdown -= remaining

    def pull_samples(self, samples: int) -> list[Sample]:
        """Resample the buffer to the requested length and empty it."""
        raw = list(self._raw_samples)
        self._raw_samples.clear()
        if samples <= 0 or not raw:
            return []
        ratio = len(raw) / samples
        result = []
        for i in range(samples):
            index = math.floor(i * ratio)
            if index >= len(raw):
                break
            result.append(raw[index])
        return result

    @property
    def buffered_samples(self) -> int:
        return len(self._raw_samples)