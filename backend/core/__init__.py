"""Projection engine and display helpers."""
