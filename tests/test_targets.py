import random

import pytest

from sumstack.factories.targets import next_target


def test_targets_cover_inclusive_range():
    rng = random.Random(5)
    seen = {next_target(rng) for _ in range(1000)}
    assert seen == set(range(10, 26))


def test_degenerate_range_returns_single_value():
    assert next_target(random.Random(1), 12, 12) == 12


def test_inverted_range_raises():
    with pytest.raises(ValueError):
        next_target(random.Random(1), 20, 10)
