"""
Bar series module.

Reference in-memory implementation of the host's bar storage.
"""
