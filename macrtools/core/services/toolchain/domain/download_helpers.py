"""
L1 Domain: Download helpers (pure).

Size formatting and ``algo:hex`` checksum parsing.
No I/O, no subprocess.
"""

from __future__ import annotations

_KNOWN_ALGOS = ("md5", "sha1", "sha256", "sha512")


def _fmt_size(n: int | float) -> str:
    """Format byte count to human-readable string."""
    for unit in ("B", "KB", "MB", "GB"):
        if n < 1024:
            return f"{n:.1f} {unit}"
        n /= 1024
    return f"{n:.1f} TB"


def split_checksum(expected: str, default_algo: str = "md5") -> tuple[str, str]:
    """Split ``algo:hex`` into its parts.  A bare hex uses ``default_algo``.

    Returns:
        ``(algorithm, lowercase_hex)``.

    Raises:
        ValueError: If the algorithm is not one we verify with.
    """
    if ":" in expected:
        algo, digest = expected.split(":", 1)
    else:
        algo, digest = default_algo, expected
    algo = algo.strip().lower()
    if algo not in _KNOWN_ALGOS:
        raise ValueError(f"Unsupported checksum algorithm: {algo}")
    return algo, digest.strip().lower()
