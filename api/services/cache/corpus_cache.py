"""
Corpus Snapshot Cache

Stores a parsed Corpus on disk so later runs can skip re-parsing the source
text. The snapshot is opaque (pickle). A missing, unreadable or corrupt
snapshot is never an error: callers fall back to parsing.
"""

import logging
import pickle
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

# Bump when the Corpus layout changes so stale snapshots are ignored.
SNAPSHOT_VERSION = 1


class CorpusCache:
    """Reads and writes a single Corpus snapshot file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self):
        """Return the cached Corpus, or None if there is no usable snapshot."""
        from services.scripture.corpus import Corpus

        try:
            with open(self.path, "rb") as f:
                payload = pickle.load(f)
        except FileNotFoundError:
            logger.debug(f"No corpus snapshot at {self.path}")
            return None
        except (OSError, EOFError, ValueError, pickle.UnpicklingError, AttributeError, ImportError) as e:
            logger.warning(f"Ignoring unreadable corpus snapshot {self.path}: {e}")
            return None

        if (
            not isinstance(payload, dict)
            or payload.get("version") != SNAPSHOT_VERSION
            or not isinstance(payload.get("corpus"), Corpus)
        ):
            logger.warning(f"Ignoring incompatible corpus snapshot {self.path}")
            return None

        logger.info(f"Loaded corpus snapshot from {self.path}")
        return payload["corpus"]

    def save(self, corpus) -> bool:
        """Write a snapshot. Returns False (and logs) if it could not be written."""
        payload = {"version": SNAPSHOT_VERSION, "corpus": corpus}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "wb") as f:
                pickle.dump(payload, f, protocol=pickle.HIGHEST_PROTOCOL)
        except (OSError, pickle.PicklingError) as e:
            logger.warning(f"Could not write corpus snapshot {self.path}: {e}")
            return False

        logger.info(f"Wrote corpus snapshot to {self.path}")
        return True

    def delete(self) -> bool:
        """Remove the snapshot file. Returns True if a file was removed."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        logger.info(f"Deleted corpus snapshot {self.path}")
        return True
