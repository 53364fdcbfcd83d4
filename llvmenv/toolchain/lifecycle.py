"""
Build lifecycle orchestration.

Hooks a build system calls around each build. Before a build the standard
library is seeded and the preferred include directories, library
directories and libraries are pushed into the locator and into every
registered build configuration. After a build every configuration is
refreshed.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterable, List, Optional

from ..config.preferences import PreferenceStore
from .locator import Locator
from .stdlib import StandardLibrarySeeder

logger = logging.getLogger(__name__)


class BuildEvent(Enum):
    PRE_BUILD = "pre_build"
    POST_BUILD = "post_build"


class BuildConfiguration(ABC):
    """A project build configuration that accepts compiler/linker inputs."""

    @abstractmethod
    def add_include_path(self, path: str):
        pass

    @abstractmethod
    def add_library_path(self, path: str):
        pass

    @abstractmethod
    def add_library(self, library: str):
        pass

    @abstractmethod
    def refresh(self):
        """Reload the configuration after a build."""
        pass


class BuildLifecycleListener:
    """
    Reacts to build events on behalf of the locator.

    Attributes:
        locator: Locator receiving preference paths
        preferences: Preference store read on every pre-build
        seeder: Standard library seeder (optional)
        configurations: Build configurations kept in sync
    """

    def __init__(
        self,
        locator: Locator,
        preferences: PreferenceStore,
        seeder: Optional[StandardLibrarySeeder] = None,
        configurations: Iterable[BuildConfiguration] = (),
    ):
        self.locator = locator
        self.preferences = preferences
        self.seeder = seeder
        self.configurations: List[BuildConfiguration] = list(configurations)

    def register(self, configuration: BuildConfiguration):
        self.configurations.append(configuration)

    def handle(self, event: BuildEvent):
        """Dispatch a build event."""
        if event is BuildEvent.PRE_BUILD:
            self.pre_build()
        elif event is BuildEvent.POST_BUILD:
            self.post_build()

    def preferences_changed(self):
        """Call after the user edits preferences."""
        self.locator.invalidate()

    def _entries(self, value: str) -> List[str]:
        sep = self.preferences.policy.path_separator
        return [entry for entry in value.split(sep) if entry.strip()]

    def pre_build(self):
        if self.seeder is not None:
            try:
                self.seeder.seed()
            except Exception as e:
                logger.warning(f"Standard library seeding failed: {e}")

        include_paths = self._entries(self.preferences.get_include_path())
        library_paths = self._entries(self.preferences.get_library_path())
        libraries = self._entries(self.preferences.get_libraries())

        for path in include_paths:
            self.locator.add_include_path(path)
        for path in library_paths:
            self.locator.add_library_path(path)
        for library in libraries:
            self.locator.add_library(library)

        for configuration in self.configurations:
            try:
                for path in include_paths:
                    configuration.add_include_path(path)
                for path in library_paths:
                    configuration.add_library_path(path)
                for library in libraries:
                    configuration.add_library(library)
            except Exception as e:
                logger.warning(f"Failed to update {configuration}: {e}")

        logger.debug(
            f"Pre-build: {len(include_paths)} include paths, "
            f"{len(library_paths)} library paths, {len(libraries)} libraries"
        )

    def post_build(self):
        for configuration in self.configurations:
            try:
                configuration.refresh()
            except Exception as e:
                logger.warning(f"Failed to refresh {configuration}: {e}")


__all__ = ["BuildEvent", "BuildConfiguration", "BuildLifecycleListener"]
