"""Networth dashboard backend core.

Encrypted credential storage for linked financial services and a
market-hours-aware stock price cache fed by external price providers.
"""
