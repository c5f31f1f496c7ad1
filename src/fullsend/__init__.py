"""
fullsend: real-time simulation core of the $FULLSEND arcade flyer.
"""

from .data_models import Craft, Intent, SessionMode
from .session import FrameSnapshot, GameSession

__all__ = ["Craft", "FrameSnapshot", "GameSession", "Intent", "SessionMode"]
