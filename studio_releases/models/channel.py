"""
Release channels published on the releases list.
"""
from enum import Enum
from functools import total_ordering

from studio_releases.core.errors import UnknownChannelError


@total_ordering
class Channel(Enum):
    """Release track of a build, ordered from least to most stable."""

    CANARY = "Canary"
    BETA = "Beta"
    RC = "RC"
    RELEASE = "Release"
    PATCH = "Patch"

    @property
    def label(self) -> str:
        """Canonical label as it appears on the releases page"""
        return self.value

    @classmethod
    def parse(cls, text: str) -> 'Channel':
        """
        Parse a canonical channel label.

        Matching is exact and case-sensitive; anything else is rejected rather
        than mapped to a default channel.

        Raises:
            UnknownChannelError: If text is not a canonical label
        """
        match text:
            case "Canary":
                return cls.CANARY
            case "Beta":
                return cls.BETA
            case "RC":
                return cls.RC
            case "Release":
                return cls.RELEASE
            case "Patch":
                return cls.PATCH
        raise UnknownChannelError(text)

    def __lt__(self, other):
        if not isinstance(other, Channel):
            return NotImplemented
        members = list(Channel)
        return members.index(self) < members.index(other)

    def __str__(self) -> str:
        return self.value
