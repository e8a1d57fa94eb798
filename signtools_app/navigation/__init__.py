"""
Marker navigation.

Binary search over confirmed marker times, and the viewport moves that
bring a marker into view.
"""
