"""
Market data module.

Handles retrieval of Bybit listing and kline payloads and their parsing
into canonical, chronologically ordered data structures.
"""
