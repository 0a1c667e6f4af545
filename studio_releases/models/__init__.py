from .channel import Channel
from .release import Release

__all__ = [
    'Channel',
    'Release'
]
