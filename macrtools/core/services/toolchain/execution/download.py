"""
L4 Execution: Artifact download and checksum verification.

``fetch_artifact`` is idempotent: a file already in the scratch
directory is reused without touching the network. Downloads land in a
``.part`` file first, so an interrupted transfer is never mistaken for
a finished one.
"""

from __future__ import annotations

import hashlib
import logging
import urllib.error
import urllib.request
from pathlib import Path

from macrtools.core.services.toolchain.data.constants import USER_AGENT
from macrtools.core.services.toolchain.domain.download_helpers import _fmt_size, split_checksum
from macrtools.core.services.toolchain.domain.errors import IntegrityError, TransportError

logger = logging.getLogger(__name__)

_CHUNK = 64 * 1024


def fetch_artifact(
    base_url: str,
    file_name: str,
    dest_dir: Path,
    *,
    timeout: int = 60,
) -> Path:
    """Download ``base_url + file_name`` into ``dest_dir``.

    Args:
        base_url: URL prefix, normally ending in ``/``.
        file_name: Artifact file name; also the local file name.
        dest_dir: Scratch directory (created if missing).
        timeout: Socket timeout in seconds.

    Returns:
        Path to the local artifact.

    Raises:
        TransportError: On any network or write failure. No retry.
    """
    try:
        dest_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise TransportError(f"Cannot create scratch directory {dest_dir}: {e}") from e
    dest = dest_dir / file_name
    if dest.is_file():
        logger.info("Reusing %s (%s)", dest, _fmt_size(dest.stat().st_size))
        return dest

    url = base_url + file_name
    part = dest.with_name(dest.name + ".part")
    logger.info("Downloading %s", url)

    try:
        req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            total = int(resp.headers.get("Content-Length", 0) or 0)
            downloaded = 0
            last_progress = -10
            with open(part, "wb") as f:
                while True:
                    chunk = resp.read(_CHUNK)
                    if not chunk:
                        break
                    f.write(chunk)
                    downloaded += len(chunk)

                    if total > 0:
                        pct = int(downloaded * 100 / total)
                        if pct >= last_progress + 10:
                            last_progress = pct
                            logger.info(
                                "Download progress: %d%% (%s / %s)",
                                pct, _fmt_size(downloaded), _fmt_size(total),
                            )
    except (urllib.error.URLError, OSError, ValueError) as e:
        part.unlink(missing_ok=True)
        raise TransportError(f"Download of {url} failed: {e}") from e

    if total and downloaded != total:
        part.unlink(missing_ok=True)
        raise TransportError(
            f"Download of {url} truncated: got {downloaded} of {total} bytes"
        )

    try:
        part.replace(dest)
    except OSError as e:
        part.unlink(missing_ok=True)
        raise TransportError(f"Cannot move {part.name} into place: {e}") from e
    logger.info("Downloaded %s to %s", _fmt_size(downloaded), dest)
    return dest


def compute_checksum(path: Path, algorithm: str = "md5") -> str:
    """Hex digest of the file at ``path``."""
    h = hashlib.new(algorithm)
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK), b""):
            h.update(chunk)
    return h.hexdigest()


def verify_artifact(path: Path, expected: str, algorithm: str = "md5") -> str:
    """Check ``path`` against ``expected`` (``hex`` or ``algo:hex``).

    A mismatching file is deleted so the next run downloads it again
    instead of reusing it.

    Returns:
        The computed digest.

    Raises:
        IntegrityError: On mismatch.
    """
    algo, expected_hex = split_checksum(expected, default_algo=algorithm)
    actual = compute_checksum(path, algo)
    if actual != expected_hex:
        logger.error(
            "%s mismatch for %s: expected %s, got %s", algo, path, expected_hex, actual,
        )
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not delete rejected artifact %s: %s", path, e)
        raise IntegrityError(str(path), expected_hex, actual)
    logger.info("Verified %s (%s %s)", path.name, algo, actual)
    return actual
