"""CI provider detection.

Classifies the current process into one of the supported CI systems by
looking at the environment variables each system sets on its runners.

Environment variables:
    GITHUB_ACTIONS — "true" on GitHub Actions runners
    TF_BUILD — "True" on Azure Pipelines agents
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from enum import Enum

logger = logging.getLogger(__name__)


class Provider(Enum):
    """CI system whose log viewer understands our group markers."""

    GITHUB = "github"
    AZURE = "azure"
    NONE = "none"

    @property
    def is_active(self) -> bool:
        return self is not Provider.NONE

    def start_marker(self, title: str) -> str | None:
        """Return the line that opens a group, or None when inactive.

        The title is inserted verbatim.
        """
        templates = _MARKERS.get(self)
        if templates is None:
            return None
        return templates[0].format(title=title)

    def end_marker(self) -> str | None:
        templates = _MARKERS.get(self)
        if templates is None:
            return None
        return templates[1]


# (start, end) per provider. The leading newline puts the marker at
# column 0 even if the previous write had no trailing newline.
_MARKERS: dict[Provider, tuple[str, str]] = {
    Provider.GITHUB: ("\n::group::{title}", "\n::endgroup::"),
    Provider.AZURE: ("\n##[group]{title}", "\n##[endgroup]"),
}

# Checked in order; first match wins.
DETECTION_ORDER: tuple[tuple[str, Provider], ...] = (
    ("GITHUB_ACTIONS", Provider.GITHUB),
    ("TF_BUILD", Provider.AZURE),
)


def is_truthy_flag(value: str | None) -> bool:
    """True only for an ASCII case-insensitive "true"."""
    if value is None:
        return False
    return value.isascii() and value.lower() == "true"


def detect(environ: Mapping[str, str] | None = None) -> Provider:
    """Detect the active CI provider.

    Args:
        environ: Environment to inspect. Defaults to os.environ, read at
            call time.

    Returns:
        The first provider in DETECTION_ORDER whose variable is "true",
        or Provider.NONE.
    """
    env = os.environ if environ is None else environ
    for var, provider in DETECTION_ORDER:
        if is_truthy_flag(env.get(var)):
            logger.debug("Detected %s via %s", provider.value, var)
            return provider
    logger.debug("No CI provider detected")
    return Provider.NONE
