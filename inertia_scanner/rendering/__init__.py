"""Hand skeleton overlay."""
from .skeleton import SkeletonRenderer, SkeletonStyle, HAND_CONNECTIONS

__all__ = ["SkeletonRenderer", "SkeletonStyle", "HAND_CONNECTIONS"]
