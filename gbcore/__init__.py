"""Game Boy and Game Boy Color emulation components."""

__version__ = "0.1.0"