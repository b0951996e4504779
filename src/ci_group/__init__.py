"""ci_group — collapsible CI log sections that close even when the work fails."""

from ci_group.guard import Group, group, open
from ci_group.provider import Provider, detect

__all__ = ["Group", "Provider", "detect", "group", "open"]
