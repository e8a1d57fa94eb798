"""Sound notification adapters and sound resource normalization."""

from abc import ABC, abstractmethod
from typing import Optional

import structlog

DEFAULT_SOUND_DIRECTORY = "C:\\Windows\\Media"
DEFAULT_SOUND_EXTENSION = ".wav"


def normalize_sound_resource(
    resource: Optional[str],
    sound_directory: str = DEFAULT_SOUND_DIRECTORY
) -> Optional[str]:
    """
    Normalize a configured sound resource.

    Rules:
    - empty or missing disables sound (returns None)
    - a bare file name is resolved against ``sound_directory``
    - a file name without extension gets ``.wav`` appended

    Args:
        resource: Configured sound file name or path
        sound_directory: Directory holding the host's system sounds

    Returns:
        Playable resource path, or None when sound is disabled
    """
    if not resource:
        return None

    if "\\" not in resource and "/" not in resource:
        separator = "/" if "/" in sound_directory and "\\" not in sound_directory else "\\"
        resource = sound_directory.rstrip("\\/") + separator + resource

    file_name = resource.replace("\\", "/").rsplit("/", 1)[-1]
    if "." not in file_name:
        resource += DEFAULT_SOUND_EXTENSION

    return resource


class BaseNotificationAdapter(ABC):
    """Base class for sound outputs."""

    def __init__(self, name: str):
        self.name = name
        self.logger = structlog.get_logger(f"notifications.{name}")
        self._played_count = 0

    @abstractmethod
    def _play(self, resource: str) -> None:
        """Hand the resource to the actual output."""
        pass

    def play_sound(self, resource: str) -> None:
        """Play a normalized sound resource."""
        self._play(resource)
        self._played_count += 1
        self.logger.info(
            "Sound requested",
            adapter=self.name,
            resource=resource,
            played_count=self._played_count
        )

    @property
    def played_count(self) -> int:
        return self._played_count


class LoggingNotificationAdapter(BaseNotificationAdapter):
    """Sound output for headless hosts; requests are only logged."""

    def __init__(self, name: str = "log"):
        super().__init__(name)

    def _play(self, resource: str) -> None:
        pass
