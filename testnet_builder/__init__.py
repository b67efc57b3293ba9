"""Testnet Builder - genesis and topology generator for local testnets."""

__version__ = "0.1.0"
