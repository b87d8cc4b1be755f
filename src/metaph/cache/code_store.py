"""Persisted sound index: LMDB store of code -> words.

Saves a built SoundIndex so later processes can answer sound-alike
queries without re-reading and re-encoding the word list.

LMDB values are msgpack-encoded:
  codes db:  code -> [word, ...]
  meta db:   "max_length" -> int
"""

import logging

import lmdb
import msgpack

from ..core.encoder import double_metaphone
from ..index.sound_index import SoundIndex

logger = logging.getLogger(__name__)

DEFAULT_MAP_SIZE = 256 * 1024 * 1024

_MAX_LENGTH_KEY = b"max_length"


class CodeStore:
    """LMDB-backed code -> words buckets."""

    def __init__(self, path, map_size=DEFAULT_MAP_SIZE, readonly=False):
        # Read-only stores must already exist; nothing is created on disk.
        create = not readonly
        self.env = lmdb.open(str(path), map_size=map_size, max_dbs=2,
                             readonly=readonly, create=create)
        self.codes_db = self.env.open_db(b"codes", create=create)
        self.meta_db = self.env.open_db(b"meta", create=create)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def save(self, index: SoundIndex) -> None:
        """Replace the stored buckets with those of index."""
        with self.env.begin(write=True) as txn:
            txn.drop(self.codes_db, delete=False)
            for code, words in index.items():
                txn.put(code.encode("utf-8"), msgpack.packb(words),
                        db=self.codes_db)
            txn.put(_MAX_LENGTH_KEY, msgpack.packb(index.max_length),
                    db=self.meta_db)
        logger.info("Stored %d codes (max_length=%d)",
                    index.size(), index.max_length)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def max_length(self) -> int | None:
        """Code length the stored index was built with, or None if empty."""
        with self.env.begin(db=self.meta_db) as txn:
            val = txn.get(_MAX_LENGTH_KEY)
            if val is None:
                return None
            return msgpack.unpackb(val)

    def _require_max_length(self) -> int:
        max_length = self.max_length
        if max_length is None:
            raise ValueError("code store holds no saved index")
        return max_length

    def lookup(self, code: str) -> list[str] | None:
        """Words stored under code, or None."""
        with self.env.begin(db=self.codes_db) as txn:
            val = txn.get(code.encode("utf-8"))
            if val is None:
                return None
            return msgpack.unpackb(val)

    def match(self, word: str) -> set[str]:
        """Stored words sharing a code with word."""
        max_length = self._require_max_length()
        matches = set()
        for code in double_metaphone(word, max_length):
            if code:
                matches.update(self.lookup(code) or ())
        return matches

    def size(self) -> int:
        """Number of stored codes."""
        with self.env.begin(db=self.codes_db) as txn:
            return txn.stat(self.codes_db)["entries"]

    def load(self) -> SoundIndex:
        """Rebuild an in-memory SoundIndex from the store."""
        max_length = self._require_max_length()
        buckets = {}
        with self.env.begin(db=self.codes_db) as txn:
            for key, val in txn.cursor():
                buckets[key.decode("utf-8")] = msgpack.unpackb(val)
        return SoundIndex.from_buckets(buckets, max_length)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self):
        """Close LMDB environment."""
        self.env.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
