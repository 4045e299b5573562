"""Compound contribution projection backend."""
