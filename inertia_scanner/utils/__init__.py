"""Utility modules for display, logging and frame-rate tracking."""
from .performance import FrameRateMonitor
from .visualization import Visualizer, VisualizerConfig
from .logger import setup_logging

__all__ = ["FrameRateMonitor", "Visualizer", "VisualizerConfig", "setup_logging"]
