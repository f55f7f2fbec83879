from enum import Enum

from .errors import InvalidConfiguration


class StrategyType(str, Enum):
    FREE = 'free'
    FLAT = 'flat'
    LINEAR = 'linear'
    QUADRATIC = 'quadratic'


_EXPLANATIONS = {
    StrategyType.FREE: 'Every play is free, no matter how many players have joined.',
    StrategyType.FLAT: 'Your first play is free. Every play after that costs 1 coin.',
    StrategyType.LINEAR: (
        'Your first play is free. Every play after that costs '
        '1 coin x the number of players.'
    ),
    StrategyType.QUADRATIC: (
        'Your first play is free. Every play after that costs '
        '1 coin x the square of the number of players.'
    ),
}


class FeeStrategy:
    """Maps the number of enrolled players to the fee for a repeat play."""

    def __init__(self, strategy=StrategyType.QUADRATIC):
        self.strategy_type = self.parse(strategy)

    @staticmethod
    def parse(strategy) -> StrategyType:
        try:
            return StrategyType(strategy)
        except ValueError:
            allowed = ', '.join(s.value for s in StrategyType)
            raise InvalidConfiguration(
                f"Unknown fee strategy '{strategy}'. Choose one of: {allowed}"
            ) from None

    def calculate(self, enrolled_count: int, base_unit: int) -> int:
        if enrolled_count < 0:
            raise ValueError('enrolled_count must not be negative')
        if self.strategy_type is StrategyType.FREE:
            return 0
        if self.strategy_type is StrategyType.FLAT:
            return base_unit
        if self.strategy_type is StrategyType.LINEAR:
            return base_unit * enrolled_count
        return base_unit * enrolled_count * enrolled_count

    def explain(self) -> str:
        return _EXPLANATIONS[self.strategy_type]

    def __repr__(self):
        return f"FeeStrategy({self.strategy_type.value!r})"
