"""Profile selection and recursive inheritance.

A selected profile is completed by walking its 'inherit' chain. Each parent
is taken out of the store as it is used and its name recorded as visited,
so a chain that returns to a name seen before fails just like a chain that
names a profile which never existed.
"""

from typing import List, Optional, Tuple

from eventmail.config.models import Profile
from eventmail.logging import get_logger

from .exceptions import (
    InheritanceLoopOrMissingError,
    ProfileNotCallableError,
    ProfileNotFoundError,
)
from .store import ProfileStore

logger = get_logger(__name__, component="profiles")


def fill_unset(target: Profile, source: Profile) -> Profile:
    """Return a copy of target with its unset mergeable fields taken from source.

    Fields already set on target are never overwritten.
    """
    updates = {
        field: getattr(source, field)
        for field in Profile.MERGEABLE_FIELDS
        if getattr(target, field) is None and getattr(source, field) is not None
    }
    return target.model_copy(update=updates)


def inherit_from(child: Profile, parent: Profile) -> Profile:
    """Merge parent into child.

    The result keeps every field set on the child and takes the parent's
    value for the rest. 'inherit' always comes from the parent so the next
    ancestor can be resolved; 'doc' is dropped.
    """
    merged = fill_unset(child, parent)
    return merged.model_copy(update={"inherit": parent.inherit, "doc": None})


def select_profile(store: ProfileStore, name: Optional[str] = None) -> Tuple[str, Profile]:
    """Take the named profile, or the first one in the store, out of the store.

    Args:
        store: Profiles loaded from the configuration file
        name: Profile name from the command line, or None for the first profile

    Returns:
        Tuple of (profile name, profile)

    Raises:
        ProfileNotFoundError: If the named profile does not exist or the store is empty
        ProfileNotCallableError: If the profile has no 'doc' field
    """
    if name is not None:
        profile = store.remove_by_name(name)
        if profile is None:
            raise ProfileNotFoundError(f"Profile '{name}' was passed, but does not exist.")
    else:
        first = store.remove_first()
        if first is None:
            raise ProfileNotFoundError("Did not find any profile in config file.")
        name, profile = first

    if profile.doc is None:
        raise ProfileNotCallableError(f"Profile {name} is not set as callable (no 'doc').")

    logger.debug(
        f"Selected profile {name}",
        extra={"event": "profile.selected", "profile_name": name},
    )
    return name, profile


def resolve_inheritance(
    profile: Profile,
    store: ProfileStore,
    name: Optional[str] = None,
) -> Profile:
    """Merge parents into profile until no 'inherit' reference remains.

    Args:
        profile: The selected profile, already removed from the store
        store: Remaining profiles; inherited entries are removed as they are used
        name: Name of the selected profile, recorded as visited

    Returns:
        Fully merged profile with 'inherit' unset and 'doc' cleared

    Raises:
        InheritanceLoopOrMissingError: If a parent is missing or already visited
    """
    chain: List[str] = [name] if name is not None else []
    visited = set(chain)

    resolved = profile.model_copy(update={"doc": None})
    while resolved.inherit is not None:
        parent_name = resolved.inherit
        parent = None if parent_name in visited else store.remove_by_name(parent_name)
        if parent is None:
            raise InheritanceLoopOrMissingError(parent_name, chain)

        visited.add(parent_name)
        chain.append(parent_name)
        resolved = inherit_from(resolved, parent)

        logger.debug(
            f"Inherited from profile {parent_name}",
            extra={"event": "profile.inherited", "parent": parent_name, "depth": len(chain)},
        )

    return resolved


def resolve_profile(store: ProfileStore, name: Optional[str] = None) -> Tuple[str, Profile]:
    """Select a profile and resolve its inheritance chain.

    Returns:
        Tuple of (selected profile name, fully resolved profile)
    """
    selected_name, profile = select_profile(store, name)
    return selected_name, resolve_inheritance(profile, store, selected_name)
