"""
Marker lifecycle state machine.

Drives markers through none -> provisional -> confirmed as ticks arrive
and bars close, and holds the alert policy models.
"""
