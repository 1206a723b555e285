"""Utility helpers shared across iFilter."""
