"""Geometry, configuration and visualization helpers."""
