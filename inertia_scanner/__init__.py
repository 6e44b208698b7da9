"""
Inertia Scanner
================

Watches a webcam for thumbs-up gestures, one hand at a time, and answers
each one with a floating quote bubble that drifts upward and expires.

Modules:
    - capture: Camera frame acquisition
    - detection: Landmark types and the MediaPipe hand detector
    - recognition: Thumbs-up classifier and per-hand cooldown gate
    - effects: Quote bubble lifecycle
    - rendering: Hand skeleton overlay
    - core: Frame loop orchestrator
    - utils: Display layer, configuration, logging
"""

__version__ = "1.0.0"
