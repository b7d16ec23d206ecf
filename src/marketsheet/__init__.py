"""marketsheet - Polymarket Gamma markets reshaped into spreadsheet rows."""

__version__ = "0.1.0"
