"""Ephemeral quote bubbles spawned by thumbs-up triggers."""
from .bubbles import Bubble, BubbleConfig, BubbleManager, QuoteCycle, load_quotes

__all__ = ["Bubble", "BubbleConfig", "BubbleManager", "QuoteCycle", "load_quotes"]
