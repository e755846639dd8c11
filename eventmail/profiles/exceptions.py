"""Exceptions raised while selecting and resolving profiles."""

from typing import List, Optional


class ProfileError(Exception):
    """Base exception for profile selection and inheritance errors."""

    pass


class ProfileNotFoundError(ProfileError):
    """Raised when the requested profile does not exist or the store is empty."""

    pass


class ProfileNotCallableError(ProfileError):
    """Raised when the selected profile has no 'doc' field."""

    pass


class InheritanceLoopOrMissingError(ProfileError):
    """Raised when an inherited profile is missing or was already consumed.

    Attributes:
        name: The parent profile name that could not be resolved
        chain: Profile names walked before the failure, starting with the selected one
    """

    def __init__(self, name: str, chain: Optional[List[str]] = None):
        self.name = name
        self.chain = list(chain or [])
        message = (
            f"Inherited profile {name} either does not exist or inheritance loop exists."
        )
        if self.chain:
            message += f" Chain: {' -> '.join(self.chain + [name])}"
        super().__init__(message)
