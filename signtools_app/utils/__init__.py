"""
Utility functions module.

Time formatting for deterministic chart object ids.
"""
