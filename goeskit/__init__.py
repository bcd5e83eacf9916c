"""Decoding of GOES LRIT/HRIT soft-symbol streams into packets, and parsing of DCS and EMWIN products."""

__version__ = "0.1.0"