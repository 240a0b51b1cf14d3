"""RSI (Relative Strength Index) calculation with Wilder smoothing"""

from collections.abc import Iterable, Sequence
from typing import Optional

from ..data.models import Candle

MAX_RSI = 100.0
MIN_RSI = 0.0
NEUTRAL_RSI = 50.0


def calculate_price_deltas(closes: Sequence[float]) -> list[float]:
    """
    Calculate price-to-price changes across a series

    Args:
        closes: Closing prices in chronological order

    Returns:
        List of len(closes) - 1 deltas
    """
    return [curr - prev for prev, curr in zip(closes, closes[1:])]


def split_gains_losses(deltas: Iterable[float]) -> tuple[list[float], list[float]]:
    """
    Split deltas into gain and loss magnitudes

    A positive delta is a gain (loss 0), a negative delta is a loss (gain 0),
    an unchanged price contributes 0 to both.
    """
    gains = []
    losses = []
    for delta in deltas:
        gains.append(delta if delta > 0 else 0.0)
        losses.append(-delta if delta < 0 else 0.0)
    return gains, losses


def wilder_average(values: Sequence[float], period: int) -> float:
    """
    Wilder-smoothed average of a value series

    Seeds with the simple mean of the first ``period`` values (or of all
    values when fewer are available), then applies
    avg = (avg_prev * (period - 1) + current) / period for the rest.

    Args:
        values: Non-empty sequence of gains or losses
        period: Smoothing period

    Returns:
        Smoothed average at the last value
    """
    seed_count = min(period, len(values))
    average = sum(values[:seed_count]) / seed_count

    for value in values[seed_count:]:
        average = (average * (period - 1) + value) / period

    return average


def rsi_from_averages(avg_gain: float, avg_loss: float) -> float:
    """
    Convert average gain/loss into an RSI value

    RSI = 100 - 100 / (1 + avg_gain / avg_loss)

    With no losses the RSI is 100, unless there were no gains either,
    in which case the flat series is reported as neutral (50).
    """
    if avg_loss == 0.0:
        return NEUTRAL_RSI if avg_gain == 0.0 else MAX_RSI

    rs = avg_gain / avg_loss
    return MAX_RSI - (MAX_RSI / (1.0 + rs))


def calculate_rsi(closes: Sequence[float], period: int = 14) -> Optional[float]:
    """
    Calculate RSI at the last point of a closing price series

    Args:
        closes: Closing prices (must be in chronological order)
        period: RSI period (default 14)

    Returns:
        RSI value in [0, 100] or None if insufficient data

    Raises:
        ValueError: If period is not positive
    """
    if period <= 0:
        raise ValueError(f"RSI period must be positive, got {period}")

    if len(closes) < period:
        return None

    deltas = calculate_price_deltas(closes)
    if not deltas:
        # Single price, only reachable with period 1
        return NEUTRAL_RSI

    gains, losses = split_gains_losses(deltas)
    avg_gain = wilder_average(gains, period)
    avg_loss = wilder_average(losses, period)

    rsi = rsi_from_averages(avg_gain, avg_loss)
    return min(MAX_RSI, max(MIN_RSI, rsi))


class RSICalculator:
    """Stateless RSI calculator bound to a period"""

    def __init__(self, period: int = 14):
        if period <= 0:
            raise ValueError(f"RSI period must be positive, got {period}")
        self.period = period

    def calculate(self, closes: Sequence[float]) -> Optional[float]:
        """
        Calculate RSI from closing prices

        Returns:
            RSI value or None if fewer than ``period`` closes
        """
        return calculate_rsi(closes, self.period)

    def calculate_with_candles(self, candles: Sequence[Candle]) -> Optional[float]:
        """
        Calculate RSI from candles in chronological order

        Returns:
            RSI value or None if fewer than ``period`` candles
        """
        return self.calculate([candle.close for candle in candles])
