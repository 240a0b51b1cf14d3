"""
RSI Screener - Perpetual Futures Momentum Scanner

Polls the Bybit public market-data API for the top perpetual futures
contracts, computes the Wilder RSI over their recent candles and reports
the symbols trading in oversold or overbought territory.
"""

__version__ = "0.1.0"
