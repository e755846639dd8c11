"""Profile store, selection and inheritance."""

from .exceptions import (
    InheritanceLoopOrMissingError,
    ProfileError,
    ProfileNotCallableError,
    ProfileNotFoundError,
)
from .resolver import (
    fill_unset,
    inherit_from,
    resolve_inheritance,
    resolve_profile,
    select_profile,
)
from .store import ProfileStore

__all__ = [
    "ProfileStore",
    "select_profile",
    "resolve_inheritance",
    "resolve_profile",
    "inherit_from",
    "fill_unset",
    "ProfileError",
    "ProfileNotFoundError",
    "ProfileNotCallableError",
    "InheritanceLoopOrMissingError",
]
