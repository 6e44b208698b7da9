"""
Core engine components.
"""

from .frame_loop import FrameLoop, FrameResult

__all__ = [
    'FrameLoop',
    'FrameResult',
]
