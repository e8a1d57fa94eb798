"""
SignTools - Signal Marker Lifecycle Engine

Annotates a streaming price series with buy/sell markers produced by a
pluggable signal function. Markers are drawn provisionally on the forming bar,
confirmed when the bar closes, and indexed by time for chart navigation.
"""

__version__ = "0.1.0"
__author__ = "SignTools Team"
