"""Team name and description value objects."""

from dataclasses import dataclass

from .base import BoundedDescription, BoundedName


@dataclass(frozen=True)
class TeamName(BoundedName):
    """Team name: 2-255 letters, digits, spaces, hyphens or underscores."""

    LABEL = "Team name"
    CODE_PREFIX = "team.name"


@dataclass(frozen=True)
class TeamDescription(BoundedDescription):
    LABEL = "Team description"
    CODE_PREFIX = "team.description"
