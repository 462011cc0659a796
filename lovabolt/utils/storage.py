"""Durable key-value slots for saved projects.

``FileStorage`` keeps one JSON text file per key inside a directory and
replaces it atomically on every write. ``MemoryStorage`` has the same
interface and is used where nothing should reach the disk.
"""

import os
import re
import sys
import tempfile
from pathlib import Path

from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential

_KEY_RE = re.compile(r"^[A-Za-z0-9._-]+$")


class StorageError(Exception):
    """A durable slot could not be read, written or removed."""


class StorageQuotaError(StorageError):
    """Writing the value would exceed the configured quota."""


class StorageUnavailableError(StorageError):
    """The backing medium cannot be used at all."""


def _check_key(key: str) -> str:
    if not isinstance(key, str) or not _KEY_RE.match(key):
        raise ValueError(f"Invalid storage key: {key!r}")
    return key


def _is_transient(exc: BaseException) -> bool:
    """Return True for I/O errors that usually clear up on their own."""
    return isinstance(exc, (BlockingIOError, InterruptedError, TimeoutError))


class MemoryStorage:
    """In-process slot store. ``quota_bytes`` mimics a browser storage quota."""

    def __init__(self, quota_bytes: int | None = None):
        self.quota_bytes = quota_bytes
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(_check_key(key))

    def set(self, key: str, value: str) -> None:
        _check_key(key)
        if self.quota_bytes is not None and len(value.encode("utf-8")) > self.quota_bytes:
            raise StorageQuotaError(
                f"Value for '{key}' is {len(value.encode('utf-8'))} bytes; "
                f"quota is {self.quota_bytes}."
            )
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(_check_key(key), None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class FileStorage:
    """One ``<key>.json`` file per slot under ``directory``."""

    def __init__(self, directory: str | Path, quota_bytes: int | None = None, max_retries: int = 2):
        self.directory = Path(directory)
        self.quota_bytes = quota_bytes
        self.max_retries = max_retries

    def _path(self, key: str) -> Path:
        return self.directory / f"{_check_key(key)}.json"

    def get(self, key: str) -> bytes | None:
        """Raw slot contents. Decoding is left to the record parser."""
        path = self._path(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StorageUnavailableError(f"Cannot read {path}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        encoded = value.encode("utf-8")
        if self.quota_bytes is not None and len(encoded) > self.quota_bytes:
            raise StorageQuotaError(
                f"Value for '{key}' is {len(encoded)} bytes; quota is {self.quota_bytes}."
            )

        @retry(
            stop=stop_after_attempt(self.max_retries + 1),  # +1 because first attempt counts
            wait=wait_exponential(multiplier=0.05, min=0.05, max=1),
            retry=retry_if_exception(_is_transient),
            reraise=True,
            before_sleep=lambda state: print(
                f"[LovaBolt] Transient storage error: {state.outcome.exception()!r}. "
                f"Retrying in {state.next_action.sleep:.2f}s "
                f"(attempt {state.attempt_number}/{self.max_retries})...",
                file=sys.stderr,
            ),
        )
        def _write():
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "wb") as fh:
                    fh.write(encoded)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise

        try:
            _write()
        except OSError as exc:
            raise StorageUnavailableError(f"Cannot write {path}: {exc}") from exc

    def remove(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageUnavailableError(f"Cannot remove {path}: {exc}") from exc

    def __contains__(self, key: str) -> bool:
        return self._path(key).exists()
