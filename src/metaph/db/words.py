"""PostgreSQL word-list storage.

Stores named word lists in a single table:
- words: (word, source) pairs; source names the list a word came from
"""

import logging
import os

import psycopg

from ..ingest.wordlist import WordListError

logger = logging.getLogger(__name__)

DB_CONFIG = {
    "dbname": os.environ.get("METAPH_DB_NAME", "metaph"),
    "user": os.environ.get("METAPH_DB_USER", "metaph"),
    "password": os.environ.get("METAPH_DB_PASSWORD", "metaph_dev"),
    "host": os.environ.get("METAPH_DB_HOST", "localhost"),
    "port": int(os.environ.get("METAPH_DB_PORT", "5432")),
}


def connect():
    """Get a connection to the word-list database."""
    return psycopg.connect(**DB_CONFIG)


def init_schema(conn):
    """Create the words table if it doesn't exist."""
    with conn.cursor() as cur:
        cur.execute("""
            CREATE TABLE IF NOT EXISTS words (
                word    TEXT NOT NULL,
                source  TEXT NOT NULL,
                PRIMARY KEY (word, source)
            );

            CREATE INDEX IF NOT EXISTS idx_words_source
                ON words(source);
        """)
    conn.commit()


def insert_words(cur, words, source: str) -> None:
    """Insert words under source, ignoring ones already present."""
    cur.executemany("""
        INSERT INTO words (word, source)
        VALUES (%s, %s)
        ON CONFLICT (word, source) DO NOTHING
    """, [(word, source) for word in words if word])


def fetch_words(conn, source: str | None = None) -> list[str]:
    """Read words, optionally only those of one source."""
    name = f"postgres:{conn.info.dbname}"
    try:
        with conn.cursor() as cur:
            if source is None:
                cur.execute("SELECT DISTINCT word FROM words ORDER BY word")
            else:
                cur.execute(
                    "SELECT word FROM words WHERE source = %s ORDER BY word",
                    (source,)
                )
            words = [row[0] for row in cur.fetchall()]
    except psycopg.Error as e:
        raise WordListError("read", name, e) from e
    logger.debug("Read %d words from %s", len(words), name)
    return words


def load_words(source: str | None = None) -> list[str]:
    """Connect, read words (optionally of one source) and disconnect."""
    name = f"postgres:{DB_CONFIG['dbname']}"
    try:
        conn = connect()
    except psycopg.Error as e:
        raise WordListError("open", name, e) from e
    with conn:
        return fetch_words(conn, source)


def store_words(words, source: str) -> int:
    """Save words under source, creating the table if needed.

    Returns the number of non-blank words submitted; duplicates already
    in the table are skipped by the insert.
    """
    words = [word for word in words if word]
    with connect() as conn:
        init_schema(conn)
        with conn.cursor() as cur:
            insert_words(cur, words, source)
    logger.info("Stored %d words under %s", len(words), source)
    return len(words)
