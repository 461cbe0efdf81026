"""Base classes for eml2pdf option dataclasses."""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    Options objects are immutable so that a single instance can be shared
    between calls; this mixin creates modified copies instead.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> Self:
        """Build an instance from a mapping, ignoring keys that are not fields.

        Parameters
        ----------
        values : Mapping[str, Any]
            Candidate field values, typically from a configuration file

        Returns
        -------
        Self
            New instance with matching fields set and defaults elsewhere

        """
        names = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in values.items() if key in names})
