import numpy as np
import pytest

from specscope.tunertransform import TunerTransform


class ArraySource:
    def __init__(self, data):
        self.data = np.asarray(data, dtype=np.complex64)

    def get_samples(self, start, length):
        if start + length > len(self.data):
            return None
        return self.data[start:start + length]


class Recorder:
    def __init__(self):
        self.count = 0

    def invalidate_event(self):
        self.count += 1


def tone(freq, n):
    return np.exp(1j * freq * np.arange(n)).astype(np.complex64)


def test_defaults_pass_samples_through():
    data = (np.arange(16) + 1j * np.arange(16)[::-1]).astype(np.complex64)
    transform = TunerTransform(ArraySource(data))
    out = transform.work(data, 0)
    assert out.dtype == np.complex64
    assert np.allclose(out, data)


def test_defaults_match_source():
    transform = TunerTransform(None)
    assert transform.frequency == 0.0
    assert transform.relative_bandwidth == 1.0
    assert transform.gain == 1.0
    assert transform.taps.tolist() == [1.0]


def test_mixing_down_a_tone_gives_dc():
    freq = 0.3
    transform = TunerTransform(None)
    transform.frequency = freq
    out = transform.work(tone(freq, 64), 0)
    assert np.allclose(out, np.ones(64), atol=1e-4)


def test_blocks_line_up_in_phase():
    freq = 0.7
    data = (np.random.default_rng(1).standard_normal(40)
            + 1j * np.random.default_rng(2).standard_normal(40)).astype(np.complex64)
    transform = TunerTransform(None)
    transform.frequency = freq
    whole = transform.work(data, 0)
    tail = transform.work(data[10:], 10)
    assert np.allclose(whole[10:], tail, atol=1e-4)


def test_impulse_response_equals_taps():
    transform = TunerTransform(None)
    transform.taps = [0.5, 0.25, 0.125]
    impulse = np.zeros(6, dtype=np.complex64)
    impulse[0] = 1.0
    out = transform.work(impulse, 0)
    assert np.allclose(out[:3], [0.5, 0.25, 0.125])
    assert np.allclose(out[3:], 0.0)


def test_filter_state_is_cleared_between_blocks():
    transform = TunerTransform(None)
    transform.taps = [0.2, 0.3, 0.5]
    data = tone(0.1, 20)
    first = transform.work(data, 0)
    second = transform.work(data, 0)
    assert np.array_equal(first, second)


def test_gain_scales_output():
    data = tone(0.2, 12)
    transform = TunerTransform(None)
    plain = transform.work(data, 0)
    transform.gain = 3.0
    scaled = transform.work(data, 0)
    assert np.allclose(scaled, plain * 3.0, atol=1e-5)


def test_empty_taps_are_rejected():
    transform = TunerTransform(None)
    with pytest.raises(ValueError):
        transform.taps = []
    assert transform.taps.tolist() == [1.0]


def test_empty_block_gives_empty_output():
    transform = TunerTransform(None)
    assert transform.work([], 5).size == 0


def test_get_samples_reads_and_transforms_from_source():
    freq = 0.4
    source = ArraySource(tone(freq, 50))
    transform = TunerTransform(source)
    transform.frequency = freq
    out = transform.get_samples(20, 10)
    assert out.shape == (10,)
    assert np.allclose(out, np.ones(10), atol=1e-4)


def test_get_samples_passes_through_missing_data():
    transform = TunerTransform(ArraySource(np.zeros(4)))
    assert transform.get_samples(2, 10) is None
    assert TunerTransform(None).get_samples(0, 1) is None


def test_subscribers_are_counted_and_notified():
    transform = TunerTransform(None)
    first, second = Recorder(), Recorder()
    transform.subscribe(first)
    transform.subscribe(second)
    assert transform.subscriber_count == 2
    transform.invalidate_event()
    assert (first.count, second.count) == (1, 1)
    transform.unsubscribe(first)
    transform.invalidate_event()
    assert transform.subscriber_count == 1
    assert (first.count, second.count) == (1, 2)


def test_unsubscribing_unknown_subscriber_raises():
    transform = TunerTransform(None)
    with pytest.raises(ValueError):
        transform.unsubscribe(Recorder())