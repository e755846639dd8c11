"""Ordered store of named profiles."""

from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from eventmail.config.models import Profile


class ProfileStore:
    """Ordered mapping from profile name to Profile.

    Insertion order follows the configuration file, so the first entry is
    the default profile. Profiles are taken out of the store when they are
    selected or inherited from; a consumed name can not be looked up again.
    """

    def __init__(self, profiles: Optional[Mapping[str, Profile]] = None):
        self._profiles: Dict[str, Profile] = dict(profiles or {})

    def __len__(self) -> int:
        return len(self._profiles)

    def __contains__(self, name: object) -> bool:
        return name in self._profiles

    def __iter__(self) -> Iterator[str]:
        return iter(self._profiles)

    def names(self) -> List[str]:
        """Names of the profiles still in the store, in file order."""
        return list(self._profiles)

    def remove_by_name(self, name: str) -> Optional[Profile]:
        """Remove and return the named profile, or None if it is absent."""
        return self._profiles.pop(name, None)

    def remove_first(self) -> Optional[Tuple[str, Profile]]:
        """Remove and return the first (name, profile) pair, or None if empty."""
        if not self._profiles:
            return None
        name = next(iter(self._profiles))
        return name, self._profiles.pop(name)

    def documented(self) -> List[Tuple[str, str]]:
        """(name, doc) pairs for every profile carrying a 'doc' field."""
        return [
            (name, profile.doc)
            for name, profile in self._profiles.items()
            if profile.doc is not None
        ]
