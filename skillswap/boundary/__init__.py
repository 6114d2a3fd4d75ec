"""Boundary adapters: persistence for the exchange core."""
