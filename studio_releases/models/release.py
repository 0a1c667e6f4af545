"""
Typed release record built from one row of the releases table.
"""
import datetime
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field

from .channel import Channel


class Release(BaseModel):
    """A single Android Studio build as published on the releases list."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    # The release date. (e.g. August 15, 2024)
    date: datetime.date

    # Major version codename. (e.g. Ladybug)
    codename: str = Field(min_length=1)

    # Version number displayed in titles. (e.g. 2024.2.1 Canary 7)
    version_title: str = Field(min_length=1)

    channel: Channel

    # Iteration of the build within its channel. (e.g. 7 for Canary 7)
    channel_version: int = Field(ge=0, le=255)

    # Release version. (e.g. 2024.2.1.3)
    version_number: str

    # Build version. (e.g. 242.20224.300.2421.12232258)
    build_version: str

    def to_dict(self) -> Dict:
        """Convert to a JSON-friendly dictionary."""
        return {
            "date": self.date.isoformat(),
            "codename": self.codename,
            "version_title": self.version_title,
            "channel": self.channel.label,
            "channel_version": self.channel_version,
            "version_number": self.version_number,
            "build_version": self.build_version,
        }

    def __str__(self) -> str:
        return (
            f"{self.date.isoformat()}  {self.codename} | {self.version_title}  "
            f"{self.version_number}  {self.build_version}"
        )
