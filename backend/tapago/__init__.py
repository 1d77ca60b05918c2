"""Tá Pago - workout tracking backend."""

__version__ = "1.0.0"
