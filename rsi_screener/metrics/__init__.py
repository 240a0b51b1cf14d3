"""Technical indicator calculations"""

from .rsi import (
    RSICalculator,
    calculate_price_deltas,
    calculate_rsi,
    rsi_from_averages,
    split_gains_losses,
    wilder_average,
)

__all__ = [
    "RSICalculator",
    "calculate_rsi",
    "calculate_price_deltas",
    "split_gains_losses",
    "wilder_average",
    "rsi_from_averages",
]
