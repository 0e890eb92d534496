"""Shared modules (constants, errors, logging, models) for gw2palette."""
