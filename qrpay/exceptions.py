# -*- coding: utf-8 -*-
"""Exceptions raised by the QR encoder."""


class DataOverflowError(ValueError):
    """The data does not fit into any allowed version at the requested level."""


class CodewordCountError(RuntimeError):
    """The codeword stream does not match the symbol's data area (encoder bug)."""
