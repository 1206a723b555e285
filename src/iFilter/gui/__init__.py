"""Qt presentation layer for iFilter."""
