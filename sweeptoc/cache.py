"""Content-addressed cache of extraction results."""
from __future__ import annotations

import hashlib

from sweeptoc.models import SweepDescription


def hash_source(source: str) -> str:
    """128-bit digest of the exact source text."""
    data = source.encode("utf-8", errors="surrogatepass")
    return hashlib.blake2b(data, digest_size=16).hexdigest()


class ResultCache:
    """
    ``hash(source) -> list[SweepDescription]``.

    Entries are never evicted. A hit returns the very list object stored
    earlier, so callers may compare results by identity.
    """

    def __init__(self) -> None:
        self._entries: dict[str, list[SweepDescription]] = {}

    def get(self, source: str) -> list[SweepDescription] | None:
        return self._entries.get(hash_source(source))

    def put(self, source: str, sweeps: list[SweepDescription]) -> list[SweepDescription]:
        return self._entries.setdefault(hash_source(source), sweeps)

    def __contains__(self, source: object) -> bool:
        return isinstance(source, str) and hash_source(source) in self._entries

    def __len__(self) -> int:
        return len(self._entries)


RESULT_CACHE = ResultCache()
