"""Best-effort key-value storage for serialized state."""

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from threading import Lock
from typing import Dict, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadResult:
    """Outcome of a storage read.

    ``value`` is None both when nothing is stored under the key and when the
    read failed; ``error`` tells the two apart.
    """

    value: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def found(self) -> bool:
        return self.ok and self.value is not None


class StorageAdapter(ABC):
    """Get/set blob capability. Implementations never raise to the caller."""

    @abstractmethod
    def load(self, key: str) -> LoadResult:
        """Read the blob stored under ``key``."""

    @abstractmethod
    def save(self, key: str, blob: str) -> bool:
        """Write ``blob`` under ``key``; False when the write failed."""

    def describe(self) -> str:
        return self.__class__.__name__


class MemoryStorage(StorageAdapter):
    """Dict-backed storage for tests and throwaway sessions."""

    def __init__(
        self,
        initial: Optional[Dict[str, str]] = None,
        fail_reads: bool = False,
        fail_writes: bool = False,
    ):
        self.data: Dict[str, str] = dict(initial or {})
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes
        self.save_count = 0

    def load(self, key: str) -> LoadResult:
        if self.fail_reads:
            return LoadResult(error="storage unavailable")
        return LoadResult(value=self.data.get(key))

    def save(self, key: str, blob: str) -> bool:
        if self.fail_writes:
            logger.warning(f"Storage write for key {key!r} failed: storage unavailable")
            return False
        self.data[key] = blob
        self.save_count += 1
        return True

    def describe(self) -> str:
        return "memory"


class JsonFileStorage(StorageAdapter):
    """All keys kept as strings inside a single JSON object on disk."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = Lock()

    def describe(self) -> str:
        return str(self.path)

    def _read_all(self) -> Dict[str, str]:
        raw = self.path.read_text(encoding="utf-8")
        if not raw.strip():
            return {}
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("storage file does not contain a JSON object")
        return data

    def load(self, key: str) -> LoadResult:
        with self._lock:
            try:
                if not self.path.exists():
                    return LoadResult()
                data = self._read_all()
            except (OSError, ValueError) as e:
                logger.warning(f"Could not read storage file {self.path}: {str(e)}")
                return LoadResult(error=str(e))

        value = data.get(key)
        if value is not None and not isinstance(value, str):
            return LoadResult(error=f"value under {key!r} is not a string")
        return LoadResult(value=value)

    def save(self, key: str, blob: str) -> bool:
        with self._lock:
            try:
                try:
                    data = self._read_all() if self.path.exists() else {}
                except ValueError:
                    logger.warning(f"Storage file {self.path} is corrupt; rewriting it")
                    data = {}
                data[key] = blob

                self.path.parent.mkdir(parents=True, exist_ok=True)
                fd, tmp_name = tempfile.mkstemp(
                    prefix=f".{self.path.name}.", dir=str(self.path.parent)
                )
                try:
                    with os.fdopen(fd, "w", encoding="utf-8") as fh:
                        json.dump(data, fh, ensure_ascii=False, indent=2)
                    os.replace(tmp_name, self.path)
                except BaseException:
                    if os.path.exists(tmp_name):
                        os.unlink(tmp_name)
                    raise
            except (OSError, TypeError, ValueError) as e:
                logger.warning(f"Storage write for key {key!r} failed: {str(e)}")
                return False

        logger.debug(f"Saved {len(blob)} bytes under {key!r} to {self.path}")
        return True
