import re
from itertools import cycle

from services.tracking_numbers import SUFFIX_LENGTH, TrackingNumberGenerator


def tracking_number_pattern(prefix):
    return re.compile(rf"^{re.escape(prefix)}-\d+-[A-Z0-9]{{{SUFFIX_LENGTH}}}$")


def test_generate_uses_clock_millis_and_suffix():
    letters = cycle("ab9x7")
    gen = TrackingNumberGenerator(prefix="SA", clock=lambda: 1700000000.1234, choice=lambda alphabet: next(letters))

    assert gen.generate() == "SA-1700000000123-AB9X7"


def test_generate_matches_pattern_for_custom_prefix():
    gen = TrackingNumberGenerator(prefix="DINSOS")
    pattern = tracking_number_pattern("DINSOS")

    for _ in range(20):
        assert pattern.match(gen.generate())


def test_generate_differs_within_same_millisecond():
    gen = TrackingNumberGenerator(clock=lambda: 1700000000.0)
    numbers = {gen.generate() for _ in range(50)}
    assert len(numbers) > 1
