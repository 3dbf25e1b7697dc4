from collections.abc import MutableMapping
from typing import Dict, Iterator, Optional

from .models import InternalUserData


class IdentityCache(MutableMapping):
    """In-process map of access token -> resolved user.

    Keys are matched exactly. Entries never expire; they only go away
    through evict() (logout) or clear().
    """

    def __init__(self):
        self._entries: Dict[str, InternalUserData] = {}

    def __getitem__(self, token: str) -> InternalUserData:
        return self._entries[token]

    def __setitem__(self, token: str, user: InternalUserData) -> None:
        if user.id is None:
            raise ValueError("Refusing to cache a user without an id")
        self._entries[token] = user

    def __delitem__(self, token: str) -> None:
        del self._entries[token]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def evict(self, token: Optional[str]) -> bool:
        """Drop the entry for token. Returns True if something was removed."""
        if token is None:
            return False
        return self._entries.pop(token, None) is not None
