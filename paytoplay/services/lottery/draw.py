from fractions import Fraction
from numbers import Real

from .errors import InvalidConfiguration

DEFAULT_CHANCE = 0.2


class Lottery:
    """Win/lose decision for a single play.

    The random source is passed in on every draw and must offer
    ``random() -> float`` in ``[0, 1)``. It is called exactly once per play
    so a seeded or scripted source replays the same outcomes.
    """

    def __init__(self, chance=DEFAULT_CHANCE):
        self.chance = DEFAULT_CHANCE
        self.configure(chance)

    def configure(self, chance) -> None:
        if isinstance(chance, bool) or not isinstance(chance, Real):
            raise InvalidConfiguration(f"Win chance must be a number, got {chance!r}")
        if not 0 < chance <= 1:
            raise InvalidConfiguration(
                f"Win chance must be greater than 0 and at most 1, got {chance}"
            )
        self.chance = float(chance)

    def play(self, randomness) -> bool:
        return randomness.random() < self.chance

    def odds(self):
        """The chance as a small ``(x, y)`` pair meaning "x in y"."""
        frac = Fraction(self.chance).limit_denominator(1000)
        return frac.numerator, frac.denominator

    def explain(self) -> str:
        x, y = self.odds()
        return (
            f"Players have a {self.chance * 100:g}% chance of winning "
            f"({x} in {y} odds)."
        )

    def __repr__(self):
        return f"Lottery(chance={self.chance})"
