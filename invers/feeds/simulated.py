"""Simulated price feed using a bounded multiplicative random walk."""

import random
from datetime import datetime
from typing import Callable, Iterator, Optional

from invers.models import PriceQuote


class PriceFeedSimulator:
    """Synthetic live prices for bitcoin and gold.

    Every tick multiplies each price by ``1 + U(-bound, bound)``. Prices
    start from fixed seeds each session and are never persisted.
    """

    DEFAULT_BTC_PRICE = 8_500_000.0
    DEFAULT_GOLD_PRICE = 7_200.0
    DEFAULT_BTC_BOUND = 0.001  # +/-0.1% per tick
    DEFAULT_GOLD_BOUND = 0.0005  # +/-0.05% per tick
    DEFAULT_INTERVAL = 3.0  # seconds

    def __init__(
        self,
        btc: float = DEFAULT_BTC_PRICE,
        gold: float = DEFAULT_GOLD_PRICE,
        btc_bound: float = DEFAULT_BTC_BOUND,
        gold_bound: float = DEFAULT_GOLD_BOUND,
        interval: float = DEFAULT_INTERVAL,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize the simulator.

        Args:
            btc: Seed bitcoin price.
            gold: Seed gold price.
            btc_bound: Max relative bitcoin move per tick.
            gold_bound: Max relative gold move per tick.
            interval: Seconds between ticks when driven by a timer.
            rng: Random generator; pass a seeded one for reproducible runs.
            clock: Source of quote timestamps.
        """
        for name, bound in (("btc_bound", btc_bound), ("gold_bound", gold_bound)):
            if not 0 <= bound < 1:
                raise ValueError(f"{name} must be in [0, 1), got {bound}")
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")

        self._seed = (btc, gold)
        self._btc_bound = btc_bound
        self._gold_bound = gold_bound
        self.interval = interval
        self._rng = rng or random.Random()
        self._clock = clock
        self._current = PriceQuote(btc=btc, gold=gold, timestamp=clock())

    @property
    def current(self) -> PriceQuote:
        """Latest quote."""
        return self._current

    def tick(self) -> PriceQuote:
        """Advance prices by one random-walk step.

        Returns:
            The new quote.
        """
        btc = self._current.btc * (1 + self._rng.uniform(-self._btc_bound, self._btc_bound))
        gold = self._current.gold * (1 + self._rng.uniform(-self._gold_bound, self._gold_bound))
        self._current = PriceQuote(btc=btc, gold=gold, timestamp=self._clock())
        return self._current

    def stream(self) -> Iterator[PriceQuote]:
        """Infinite lazy sequence of quotes, starting with the current one."""
        yield self._current
        while True:
            yield self.tick()

    def reset(self) -> PriceQuote:
        """Restart from the seed prices."""
        btc, gold = self._seed
        self._current = PriceQuote(btc=btc, gold=gold, timestamp=self._clock())
        return self._current
