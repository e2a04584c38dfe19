"""Domain notifications emitted by the services.

Receivers subscribe with ``signal.connect(func)``; the sender is the service
instance and the payload travels as keyword arguments.
"""
from __future__ import annotations

from blinker import Namespace

_signals = Namespace()

# Sent after a behaviour record leaves a student at or below the detention
# threshold. Kwargs: student_id, behaviour_points, behaviour_id.
detention_threshold_reached = _signals.signal("detention-threshold-reached")
