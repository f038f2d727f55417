from gbcore.apu.apu import Apu
from gbcore.audio import MAX_BUFFERED_SAMPLES, Audio


class CountingSource:
    def __init__(self) -> None:
        self.calls = 0

    def sample(self):
        value = float(self.calls)
        self.calls += 1
        return (value, -value)


def test_one_sample_every_four_t_states():
    audio = Audio()
    source = CountingSource()
    audio.step(source, 4)
    assert audio.buffered_samples == 1
    audio.step(source, 8)
    assert audio.buffered_samples == 3


def test_partial_steps_accumulate():
    audio = Audio()
    source = CountingSource()
    audio.step(source, 3)
    assert audio.buffered_samples == 0
    audio.step(source, 1)
    assert audio.buffered_samples == 1
    for _ in range(4):
        audio.step(source, 1)
    assert audio.buffered_samples == 2


def test_pull_exact_returns_all_in_order_and_clears():
    audio = Audio()
    source = CountingSource()
    audio.step(source, 4 * 5)
    pulled = audio.pull_samples(5)
    assert [left for left, _ in pulled] == [0.0, 1.0, 2.0, 3.0, 4.0]
    assert audio.buffered_samples == 0


def test_pull_fewer_downsamples():
    audio = Audio()
    source = CountingSource()
    audio.step(source, 4 * 10)
    pulled = audio.pull_samples(5)
    assert [left for left, _ in pulled] == [0.0, 2.0, 4.0, 6.0, 8.0]


def test_pull_more_repeats_samples():
    audio = Audio()
    source = CountingSource()
    audio.step(source, 4 * 2)
    pulled = audio.pull_samples(4)
    assert [left for left, _ in pulled] == [0.0, 0.0, 1.0, 1.0]


def test_pull_zero_clears_buffer():
    audio = Audio()
    audio.step(CountingSource(), 16)
    assert audio.pull_samples(0) == []
    assert audio.buffered_samples == 0


def test_pull_from_empty_buffer():
    assert Audio().pull_samples(10) == []


def test_buffer_is_capped_and_drops_oldest():
    audio = Audio()
    source = CountingSource()
    audio.step(source, 4 * (MAX_BUFFERED_SAMPLES + 1))
    assert audio.buffered_samples == MAX_BUFFERED_SAMPLES
    pulled = audio.pull_samples(MAX_BUFFERED_SAMPLES)
    assert pulled[0] == (1.0, -1.0)


def test_samples_from_real_apu_are_silent_when_off():
    audio = Audio()
    audio.step(Apu(), 12)
    assert audio.pull_samples(3) == [(0.0, 0.0)] * 3