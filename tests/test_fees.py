import pytest

from paytoplay.services.lottery.errors import InvalidConfiguration
from paytoplay.services.lottery.fees import FeeStrategy, StrategyType


def test_default_strategy_is_quadratic():
    assert FeeStrategy().strategy_type is StrategyType.QUADRATIC


@pytest.mark.parametrize('n', [0, 1, 2, 3, 7, 50])
def test_quadratic_fee_is_base_times_square(n):
    base = 10 ** 24
    assert FeeStrategy('quadratic').calculate(n, base) == base * n * n


def test_quadratic_fee_is_zero_without_players():
    assert FeeStrategy(StrategyType.QUADRATIC).calculate(0, 5) == 0


def test_other_variants():
    assert FeeStrategy('free').calculate(9, 3) == 0
    assert FeeStrategy('flat').calculate(9, 3) == 3
    assert FeeStrategy('flat').calculate(0, 3) == 3
    assert FeeStrategy('linear').calculate(9, 3) == 27


def test_unknown_variant_is_rejected():
    with pytest.raises(InvalidConfiguration) as exc:
        FeeStrategy('exponential')
    assert 'quadratic' in str(exc.value)
    with pytest.raises(InvalidConfiguration):
        FeeStrategy(None)


def test_negative_count_is_a_programming_error():
    with pytest.raises(ValueError):
        FeeStrategy().calculate(-1, 1)


def test_explanations_follow_the_variant():
    texts = {s: FeeStrategy(s).explain() for s in StrategyType}
    assert len(set(texts.values())) == len(StrategyType)
    assert 'square' in texts[StrategyType.QUADRATIC]
    assert 'free' in texts[StrategyType.FREE]
    assert FeeStrategy('linear').explain() == FeeStrategy(StrategyType.LINEAR).explain()
