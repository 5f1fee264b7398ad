"""Retrieval and caching of the card database archive."""

from __future__ import annotations

import hashlib
import logging
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Final

import requests

__all__ = [
    "DEFAULT_ARCHIVE_URL",
    "DEFAULT_CHECKSUM_URL",
    "ArchiveError",
    "SourceUnavailable",
    "SourceConfig",
    "read_archive",
    "is_fresh",
    "download_archive",
    "load_database_text",
]

logger = logging.getLogger(__name__)

DEFAULT_ARCHIVE_URL: Final[str] = "https://ygocdb.com/api/v0/cards.zip"
DEFAULT_CHECKSUM_URL: Final[str] = "https://ygocdb.com/api/v0/cards.zip.md5"


class ArchiveError(RuntimeError):
    """Raised when the cached archive is missing, corrupt, or incomplete."""


class SourceUnavailable(RuntimeError):
    """Raised when no usable copy of the card database can be obtained."""


@dataclass(slots=True)
class SourceConfig:
    """Where the card database comes from and how it is cached."""

    archive_url: str = DEFAULT_ARCHIVE_URL
    checksum_url: str = DEFAULT_CHECKSUM_URL
    member: str = "cards.json"
    archive_name: str = "cards.zip"
    timeout: float = 30.0

    def cache_path(self, cache_dir: Path) -> Path:
        """Return the archive location inside ``cache_dir``."""

        return cache_dir / self.archive_name


def read_archive(path: Path, member: str) -> str:
    """Return the UTF-8 text of ``member`` inside the zip archive at ``path``."""

    try:
        with zipfile.ZipFile(path) as archive:
            raw = archive.read(member)
    except FileNotFoundError as exc:
        raise ArchiveError(f"archive {path} does not exist") from exc
    except KeyError as exc:
        raise ArchiveError(f"archive {path} has no member {member!r}") from exc
    except (zipfile.BadZipFile, OSError) as exc:
        raise ArchiveError(f"archive {path} is unreadable: {exc}") from exc
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ArchiveError(f"{member} in {path} is not UTF-8 text") from exc


def is_fresh(text: str, config: SourceConfig, session: requests.Session) -> bool:
    """Return ``True`` when ``text`` matches the published MD5 checksum.

    The checksum endpoint serves a JSON string. Failing to fetch or decode it
    is treated as stale.
    """

    digest = hashlib.md5(text.encode("utf-8")).hexdigest()
    try:
        response = session.get(config.checksum_url, timeout=config.timeout)
        response.raise_for_status()
        published = response.json()
    except (requests.exceptions.RequestException, ValueError) as exc:
        logger.warning("Could not fetch database checksum: %s", exc)
        return False
    if not isinstance(published, str):
        logger.warning("Unexpected checksum payload: %r", published)
        return False
    fresh = digest == published.strip().lower()
    logger.debug("Local digest %s, published %s", digest, published)
    return fresh


def download_archive(path: Path, config: SourceConfig, session: requests.Session) -> None:
    """Fetch the archive from ``config.archive_url`` into ``path``.

    The body is written next to ``path`` first and only replaces it once it
    reads back as an archive holding ``config.member``.
    """

    logger.info("Downloading card database from %s", config.archive_url)
    try:
        response = session.get(config.archive_url, timeout=config.timeout)
        response.raise_for_status()
    except requests.exceptions.RequestException as exc:
        raise SourceUnavailable(f"download from {config.archive_url} failed: {exc}") from exc

    partial = path.with_name(path.name + ".part")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        partial.write_bytes(response.content)
    except OSError as exc:
        raise SourceUnavailable(f"cannot write archive to {partial}: {exc}") from exc
    try:
        read_archive(partial, config.member)
    except ArchiveError as exc:
        partial.unlink(missing_ok=True)
        raise SourceUnavailable(f"download from {config.archive_url} is not a usable archive: {exc}") from exc
    try:
        partial.replace(path)
    except OSError as exc:
        partial.unlink(missing_ok=True)
        raise SourceUnavailable(f"cannot move archive into {path}: {exc}") from exc
    logger.info("Saved %d bytes to %s", len(response.content), path)


def load_database_text(
    cache_path: Path,
    config: SourceConfig,
    session: requests.Session | None = None,
    *,
    offline: bool = False,
) -> str:
    """Return the card database text, refreshing the cached archive if needed.

    A stale cache is still used when the refresh download fails.
    """

    if offline and not cache_path.exists():
        raise SourceUnavailable(f"no cached archive at {cache_path} and offline mode is on")
    http = session if session is not None else requests.Session()

    if cache_path.exists():
        cached = read_archive(cache_path, config.member)
        if offline or is_fresh(cached, config, http):
            logger.info("Using cached card database %s", cache_path)
            return cached
        try:
            download_archive(cache_path, config, http)
        except SourceUnavailable as exc:
            logger.warning("Refresh failed, using stale cache: %s", exc)
            return cached
        return read_archive(cache_path, config.member)

    download_archive(cache_path, config, http)
    return read_archive(cache_path, config.member)
