"""
Append-only achievement log
"""

from __future__ import annotations

import os
import sys
from abc import ABC, abstractmethod
from typing import List

DEFAULT_FILE_LOCATION = "achievements.log"


class AchievementFile(ABC):
    """Sink that records one free-text line per event"""

    @property
    @abstractmethod
    def file_location(self) -> str:
        ...

    @file_location.setter
    @abstractmethod
    def file_location(self, location: str) -> None:
        ...

    @abstractmethod
    def save(self, data: str) -> None:
        """Append one line"""

    @abstractmethod
    def read(self) -> List[str]:
        """All previously saved lines, oldest first"""


class FileHandler(AchievementFile):
    """AchievementFile backed by a plain text file.

    Write and read failures are reported on stderr and otherwise ignored so
    a broken log never interrupts a running game.
    """

    def __init__(self, file_location: str = DEFAULT_FILE_LOCATION):
        self._file_location = file_location

    @property
    def file_location(self) -> str:
        return self._file_location

    @file_location.setter
    def file_location(self, location: str) -> None:
        self._file_location = location

    def save(self, data: str) -> None:
        try:
            with open(self._file_location, "a", encoding="utf-8") as f:
                f.write(data + "\n")
        except OSError as e:
            print(f"Error writing to file: {self._file_location} ({e})", file=sys.stderr)

    def read(self) -> List[str]:
        if not os.path.exists(self._file_location):
            return []
        try:
            with open(self._file_location, "r", encoding="utf-8") as f:
                return [line.rstrip("\n") for line in f]
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error reading from file: {self._file_location} ({e})", file=sys.stderr)
            return []
