import random

import pytest

from paytoplay.services.lottery.draw import Lottery
from paytoplay.services.lottery.errors import InvalidConfiguration


class CountingSource:
    def __init__(self, value):
        self.value = value
        self.calls = 0

    def random(self):
        self.calls += 1
        return self.value


def test_default_chance():
    assert Lottery().chance == 0.2


@pytest.mark.parametrize('chance', [0, -0.1, 1.0001, 2, 'half', None, True])
def test_configure_rejects_out_of_range(chance):
    lottery = Lottery(0.5)
    with pytest.raises(InvalidConfiguration):
        lottery.configure(chance)
    assert lottery.chance == 0.5


def test_configure_accepts_bounds():
    lottery = Lottery()
    lottery.configure(1)
    assert lottery.chance == 1.0
    lottery.configure(0.001)
    assert lottery.chance == 0.001


def test_play_draws_exactly_once():
    source = CountingSource(0.1)
    assert Lottery(0.2).play(source) is True
    assert source.calls == 1

    source = CountingSource(0.2)
    assert Lottery(0.2).play(source) is False
    assert source.calls == 1


def test_certain_win():
    assert Lottery(1).play(CountingSource(0.9999999)) is True


def test_seeded_source_replays_outcomes():
    a, b = random.Random(7), random.Random(7)
    lottery = Lottery(0.3)
    assert [lottery.play(a) for _ in range(50)] == [lottery.play(b) for _ in range(50)]


def test_win_frequency_converges_to_chance():
    source = random.Random(1234)
    lottery = Lottery(0.3)
    draws = 20000
    wins = sum(lottery.play(source) for _ in range(draws))
    assert abs(wins / draws - 0.3) < 0.02


def test_explain_renders_odds():
    assert Lottery(0.2).explain() == 'Players have a 20% chance of winning (1 in 5 odds).'
    assert Lottery(0.25).odds() == (1, 4)
    assert Lottery(0.3).odds() == (3, 10)
    assert '100%' in Lottery(1).explain()
