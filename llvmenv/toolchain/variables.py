"""
Environment variable data model.

A VariableSet is what the locator hands to the build system: one
EnvironmentVariable per name, each tagged with how the build system should
combine it with its own baseline environment.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional


class MergePolicy(Enum):
    """How a variable combines with an externally defined one of the same name."""

    REPLACE = "replace"
    APPEND = "append"


@dataclass(frozen=True)
class EnvironmentVariable:
    """
    A named environment variable contributed by llvmenv.

    Attributes:
        name: Variable name, unique within a VariableSet
        value: Value in platform-native path syntax
        merge_policy: REPLACE overwrites the host value, APPEND extends it
    """

    name: str
    value: str
    merge_policy: MergePolicy = MergePolicy.APPEND

    def to_dict(self) -> Dict[str, str]:
        return {
            "name": self.name,
            "value": self.value,
            "merge_policy": self.merge_policy.value,
        }


class VariableSet:
    """
    Mapping from variable name to EnvironmentVariable.

    Entries are replaced wholesale by ``set``; there is no partial update.
    Iteration order carries no meaning.
    """

    def __init__(self):
        self._variables: Dict[str, EnvironmentVariable] = {}

    def set(self, name: str, value: str, merge_policy: MergePolicy) -> EnvironmentVariable:
        """Replace the entry for ``name``."""
        variable = EnvironmentVariable(name, value, merge_policy)
        self._variables[name] = variable
        return variable

    def get(self, name: str) -> Optional[EnvironmentVariable]:
        return self._variables.get(name)

    def value_of(self, name: str, default: str = "") -> str:
        """Get the value of ``name``, or ``default`` when absent."""
        variable = self._variables.get(name)
        return variable.value if variable is not None else default

    def values(self) -> List[EnvironmentVariable]:
        return list(self._variables.values())

    def names(self) -> List[str]:
        return list(self._variables)

    def to_dict(self) -> Dict[str, str]:
        """Flatten to a plain ``{name: value}`` mapping."""
        return {name: var.value for name, var in self._variables.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._variables

    def __len__(self) -> int:
        return len(self._variables)

    def __iter__(self) -> Iterator[EnvironmentVariable]:
        return iter(list(self._variables.values()))


__all__ = ["MergePolicy", "EnvironmentVariable", "VariableSet"]
