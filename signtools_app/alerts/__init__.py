"""
Alert dispatching.

Decides per configured policy whether a lifecycle event raises the chart
highlight and the alert sound.
"""
