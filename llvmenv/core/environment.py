"""
Read-only access to the system environment.

The locator never touches ``os.environ`` directly; it goes through a
SystemEnvironment so tests (and embedding build servers) can inject a
fixed set of variables and separators.
"""

import logging
import os
from typing import List, Mapping, Optional

from .platform import PlatformPolicy, current_policy

logger = logging.getLogger(__name__)


class SystemEnvironment:
    """
    Lookup of named environment variables plus the platform separators.

    Attributes:
        policy: Platform policy providing the path-list and file separators
    """

    def __init__(
        self,
        variables: Optional[Mapping[str, str]] = None,
        policy: Optional[PlatformPolicy] = None,
    ):
        """
        Initialize environment accessor.

        Args:
            variables: Variables to expose (default: live ``os.environ``)
            policy: Platform policy (default: policy of the running host)
        """
        self._variables = os.environ if variables is None else dict(variables)
        self.policy = policy or current_policy()

    @property
    def path_separator(self) -> str:
        return self.policy.path_separator

    @property
    def file_separator(self) -> str:
        return self.policy.file_separator

    def get(self, name: str) -> Optional[str]:
        """
        Get an environment variable.

        Args:
            name: Variable name

        Returns:
            Variable value or None if unset
        """
        return self._variables.get(name)

    def split_path_list(self, name: str) -> List[str]:
        """
        Split a path-list variable into its entries.

        Entries keep their original order; empty entries are dropped. An
        unset variable yields no entries.

        Args:
            name: Variable name (e.g. 'PATH')

        Returns:
            List of non-empty entries
        """
        value = self.get(name)
        if value is None:
            logger.debug(f"{name} is not set, nothing to scan")
            return []
        return [entry for entry in value.split(self.path_separator) if entry]


__all__ = ["SystemEnvironment"]
