"""
Signal evaluators.

Pure functions ``evaluate(index) -> Signal | None`` over a bar series.
"""
