import numpy as np

from specscope.bits import BitDecoder, bits_to_byte, bits_to_nibble, sample_bits
from specscope.util import Range


def _bits_of(data, lsb=False):
    bits = []
    for byte in data:
        order = range(8) if lsb else range(7, -1, -1)
        bits.extend((byte >> k) & 1 for k in order)
    return bits


def _signal(bits, per_bit=10):
    return np.repeat(np.where(np.array(bits) > 0, 1.0, -1.0), per_bit).astype(np.float32)


class _Source:
    def __init__(self, data):
        self.data = np.asarray(data, dtype=np.float32)
        self.calls = 0

    def get_samples(self, start, length):
        self.calls += 1
        if start + length > len(self.data):
            return None
        return self.data[start:start + length]


def _decoder(bits, per_bit=10, lsb=False):
    source = _Source(_signal(bits, per_bit))
    dec = BitDecoder(source, lsb_first=lsb)
    dec.set_cursor_info(True, Range(0, len(bits) * per_bit), len(bits))
    return dec, source


def test_bits_to_byte_round_trip_msb():
    for value in (0, 1, 0x48, 0xA5, 0xFF):
        assert bits_to_byte(_bits_of([value]), 0, False) == value


def test_bits_to_byte_round_trip_lsb():
    for value in (0, 1, 0x69, 0x5A, 0xFF):
        assert bits_to_byte(_bits_of([value], lsb=True), 0, True) == value


def test_bits_to_nibble_partial_msb_and_lsb():
    assert bits_to_nibble([1], 0, 1, False) == 8
    assert bits_to_nibble([1], 0, 1, True) == 1


def test_bits_to_nibble_matches_high_half_of_byte():
    bits = _bits_of([0xC3])
    assert bits_to_nibble(bits, 0, 4, False) == 0xC
    assert bits_to_nibble(bits, 4, 4, False) == 0x3


def test_sample_bits_recovers_pattern():
    bits = [1, 0, 1, 1, 0, 0, 1, 0]
    assert sample_bits(_signal(bits, 7), len(bits)) == bits


def test_sample_bits_no_segments():
    assert sample_bits(np.ones(10), 0) == []


def test_extract_bits_and_strings_msb():
    bits = _bits_of(b"Hi")
    dec, _ = _decoder(bits)
    assert dec.extract_bits() == bits
    assert dec.binary_string() == "".join(map(str, bits))
    assert dec.hex_string() == b"Hi".hex().upper()
    assert dec.ascii_string() == "Hi"


def test_strings_lsb_first():
    bits = _bits_of(b"Ok", lsb=True)
    dec, _ = _decoder(bits, lsb=True)
    assert dec.ascii_string() == "Ok"


def test_non_printable_is_dot():
    dec, _ = _decoder(_bits_of([0x01, 0x41]))
    assert dec.ascii_string() == ".A"


def test_hex_string_with_partial_nibble():
    bits = _bits_of([0xA5]) + [1]
    dec, _ = _decoder(bits)
    assert dec.hex_string() == "A58"


def test_extract_bits_is_cached():
    dec, source = _decoder(_bits_of(b"x"))
    first = dec.extract_bits()
    dec.set_cursor_info(True, Range(0, 80), 8)
    assert dec.extract_bits() == first
    assert source.calls == 1
    dec.invalidate()
    dec.extract_bits()
    assert source.calls == 2


def test_changing_bit_order_invalidates_cache():
    dec, source = _decoder(_bits_of(b"x"))
    dec.extract_bits()
    dec.lsb_first = True
    dec.extract_bits()
    assert source.calls == 2
    assert dec.lsb_first is True


def test_inactive_cursors_give_no_bits():
    dec = BitDecoder(_Source(np.ones(100)))
    dec.set_cursor_info(False, Range(0, 100), 10)
    assert dec.extract_bits() == []
    assert dec.binary_string() == ""


def test_empty_range_gives_no_bits():
    dec = BitDecoder(_Source(np.ones(100)))
    dec.set_cursor_info(True, Range(50, 50), 10)
    assert dec.extract_bits() == []


def test_missing_samples_give_no_bits():
    dec = BitDecoder(_Source(np.ones(10)))
    dec.set_cursor_info(True, Range(0, 100), 10)
    assert dec.extract_bits() == []