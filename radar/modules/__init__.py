"""Radar feature modules."""
