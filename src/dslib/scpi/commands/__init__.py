"""Catalogue of command descriptors.

Modules:
    common: IEEE 488.2 common commands (``*IDN``, ``*RST``, ``*OPC``, ``*CLS``).
    ds1000: Commands specific to the DS1000Z series.
"""
