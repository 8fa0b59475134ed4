import os
import shutil
import sqlite3
from .config import config, logger
from .errors import StoreError, StoreOpenError
from .utils import encode_members, decode_members

CURRENT_DB_VERSION = 1

def get_db_version(conn):
    c = conn.cursor()
    c.execute("PRAGMA user_version")
    return c.fetchone()[0]

def set_db_version(conn, version):
    c = conn.cursor()
    c.execute(f"PRAGMA user_version = {version}")


class DigestIndex:
    """Persistent mapping from content digest to the set of paths sharing it.

    Only one thread may write at a time; the hashing pipeline guarantees this
    by funnelling every update through a single consumer.
    """

    def __init__(self, conn, path, algorithm):
        self.conn = conn
        self.path = path
        self.algorithm = algorithm

    def lookup(self, digest):
        """Return the member set for a digest, or None if it was never seen."""
        try:
            c = self.conn.cursor()
            c.execute("SELECT members FROM digests WHERE digest = ?", (digest,))
            row = c.fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"Lookup of {digest} failed: {e}") from e
        if row is None:
            return None
        return decode_members(row[0])

    def record(self, digest, path):
        """Add a path to the group for a digest.

        Returns True if the path was new for that digest. The write is
        atomic, so a failure leaves the previous member set untouched. The
        read is not locked against other writers; a scan has exactly one.
        """
        try:
            with self.conn:
                c = self.conn.cursor()
                c.execute("SELECT members FROM digests WHERE digest = ?", (digest,))
                row = c.fetchone()
                members = decode_members(row[0]) if row is not None else set()
                if path in members:
                    return False
                members.add(path)
                c.execute("INSERT OR REPLACE INTO digests (digest, members) VALUES (?, ?)",
                          (digest, encode_members(members)))
            return True
        except sqlite3.Error as e:
            raise StoreError(f"Recording {path} under {digest} failed: {e}") from e

    def groups(self):
        """Yield (digest, members) for every entry in the index."""
        try:
            c = self.conn.cursor()
            c.execute("SELECT digest, members FROM digests")
            rows = c.fetchall()
        except sqlite3.Error as e:
            raise StoreError(f"Reading {self.path} failed: {e}") from e
        for digest, value in rows:
            yield digest, decode_members(value)

    def count(self):
        try:
            c = self.conn.cursor()
            c.execute("SELECT COUNT(*) FROM digests")
            return c.fetchone()[0]
        except sqlite3.Error as e:
            raise StoreError(f"Counting digests in {self.path} failed: {e}") from e

    def clear(self):
        """Remove every digest group from the index."""
        try:
            with self.conn:
                removed = self.conn.execute("DELETE FROM digests").rowcount
        except sqlite3.Error as e:
            raise StoreError(f"Clearing {self.path} failed: {e}") from e
        logger.info(f"Removed {removed} digest groups from {self.path}")
        return removed

    def close(self):
        if self.conn is None:
            return
        self.conn.commit()
        self.conn.close()
        self.conn = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def open_index(db_name=config['default_db'], algorithm=config['hash_algorithm']):
    """Open (creating if needed) the digest index stored at db_name."""
    parent = os.path.dirname(os.path.abspath(db_name))
    try:
        os.makedirs(parent, exist_ok=True)
        # The consumer thread writes through this connection after it is opened here.
        conn = sqlite3.connect(db_name, check_same_thread=False)
    except (OSError, sqlite3.Error) as e:
        raise StoreOpenError(f"Unable to open digest index {db_name}: {e}") from e

    try:
        c = conn.cursor()
        c.execute('''CREATE TABLE IF NOT EXISTS digests
                     (digest TEXT PRIMARY KEY, members BLOB NOT NULL)''')
        c.execute('''CREATE TABLE IF NOT EXISTS meta
                     (key TEXT PRIMARY KEY, value TEXT NOT NULL)''')

        db_version = get_db_version(conn)
        if db_version < CURRENT_DB_VERSION:
            set_db_version(conn, CURRENT_DB_VERSION)

        c.execute("SELECT value FROM meta WHERE key = 'hash_algorithm'")
        row = c.fetchone()
        if row is None:
            c.execute("INSERT INTO meta (key, value) VALUES ('hash_algorithm', ?)", (algorithm,))
        elif row[0] != algorithm:
            raise StoreOpenError(
                f"Digest index {db_name} was built with {row[0]}, not {algorithm}")
        conn.commit()
    except sqlite3.Error as e:
        conn.close()
        raise StoreOpenError(f"Unable to open digest index {db_name}: {e}") from e
    except StoreOpenError:
        conn.close()
        raise

    return DigestIndex(conn, db_name, algorithm)

def backup_database(db_path):
    """Create a backup of the digest index."""
    if os.path.exists(db_path):
        backup_path = f"{db_path}.backup"
        shutil.copy2(db_path, backup_path)
        logger.info(f"Digest index backed up to {backup_path}")
    else:
        logger.info(f"No existing digest index found at {db_path}. Skipping backup.")
