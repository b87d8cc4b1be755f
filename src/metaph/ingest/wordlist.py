"""Word-list sources: plain or gzip files and HTTP(S) downloads.

A word list is newline-delimited text, one word per line. Lines are not
cleaned: case and punctuation are the encoder's concern. Failures are
reported as WordListError naming the failing stage (open, decompress or
read) and the source.
"""

import gzip
import logging
import zlib
from pathlib import Path

import requests

from ..core.encoder import DEFAULT_MAX_LENGTH
from ..index.sound_index import SoundIndex

logger = logging.getLogger(__name__)

_DECOMPRESS_ERRORS = (gzip.BadGzipFile, EOFError, zlib.error)


class WordListError(Exception):
    """A word list could not be opened, decompressed or read."""

    def __init__(self, stage: str, name: str, cause: Exception):
        self.stage = stage
        self.name = name
        self.cause = cause
        super().__init__(f"trying to {stage} word list {name}: {cause}")


def split_words(text: str) -> list[str]:
    """Split word-list text into non-blank lines."""
    return [line for line in text.splitlines() if line]


def _decode(data: bytes, name: str) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise WordListError("read", name, e) from e


def read_word_list(path) -> list[str]:
    """Read a word list file; a .gz suffix selects gzip decompression."""
    path = Path(path)
    name = str(path)
    try:
        fp = open(path, "rb")
    except OSError as e:
        raise WordListError("open", name, e) from e

    with fp:
        if path.suffix == ".gz":
            try:
                with gzip.GzipFile(fileobj=fp) as gz:
                    data = gz.read()
            except _DECOMPRESS_ERRORS as e:
                raise WordListError("decompress", name, e) from e
            except OSError as e:
                raise WordListError("read", name, e) from e
        else:
            try:
                data = fp.read()
            except OSError as e:
                raise WordListError("read", name, e) from e

    words = split_words(_decode(data, name))
    logger.debug("Read %d words from %s", len(words), name)
    return words


def fetch_word_list(url: str, timeout: float = 30.0) -> list[str]:
    """Download a word list; a URL ending in .gz is decompressed."""
    logger.info("Fetching word list %s", url)
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise WordListError("open", url, e) from e

    data = response.content
    if url.endswith(".gz"):
        try:
            data = gzip.decompress(data)
        except _DECOMPRESS_ERRORS as e:
            raise WordListError("decompress", url, e) from e

    words = split_words(_decode(data, url))
    logger.debug("Fetched %d words from %s", len(words), url)
    return words


def load_word_list(source: str) -> list[str]:
    """Read source as a URL when it has an http(s) scheme, else as a path."""
    if source.startswith(("http://", "https://")):
        return fetch_word_list(source)
    return read_word_list(source)


def index_from_file(path, max_length: int = DEFAULT_MAX_LENGTH) -> SoundIndex:
    """Build a SoundIndex from a word list file."""
    return SoundIndex.build(read_word_list(path), max_length)


def index_from_url(url: str, max_length: int = DEFAULT_MAX_LENGTH,
                   timeout: float = 30.0) -> SoundIndex:
    """Build a SoundIndex from a downloaded word list."""
    return SoundIndex.build(fetch_word_list(url, timeout), max_length)
