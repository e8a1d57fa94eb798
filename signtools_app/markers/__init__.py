"""
Marker models and storage.

Markers move from provisional (attached to the open bar) to confirmed
(attached to a closed bar and listed in the navigation index).
"""
