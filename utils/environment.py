"""
Environment providers for ringring.

Theme resolution and settings loading read process-global state (environment
variables). They do so through an EnvironmentProvider so that tests can
supply a plain mapping instead of mutating os.environ.
"""

import os
from abc import ABC, abstractmethod
from typing import Mapping, Optional


class EnvironmentProvider(ABC):
    """Abstract source of environment variables."""

    @abstractmethod
    def get(self, name: str) -> Optional[str]:
        """
        Return the value of an environment variable.

        Args:
            name (str): Variable name

        Returns:
            str or None: The value, or None when unset
        """
        pass

    def get_nonempty(self, name: str) -> Optional[str]:
        """Return the value with surrounding whitespace removed, None if empty."""
        value = self.get(name)
        if value is None:
            return None
        value = value.strip()
        return value or None


class OsEnvironment(EnvironmentProvider):
    """Environment provider backed by os.environ."""

    def get(self, name: str) -> Optional[str]:
        return os.environ.get(name)


class MappingEnvironment(EnvironmentProvider):
    """Environment provider backed by a fixed mapping (used in tests)."""

    def __init__(self, values: Optional[Mapping[str, str]] = None):
        self.values = dict(values or {})

    def get(self, name: str) -> Optional[str]:
        return self.values.get(name)
