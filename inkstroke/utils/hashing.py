"""SHA-256 hashing for jitter seeds and geometry provenance.

Provides:
    - sha256_string(): Hash a string (shape ids, option dumps)
    - sha256_array(): Hash numpy array values (outlines, stroke points)
    - seed_from_string(): Derive a 64-bit RNG seed from an id string

Deterministic hashing:
    - Arrays converted to bytes via np.ascontiguousarray(...).tobytes()
    - Results are hex strings (64 chars)

The hand-drawn path style jitters vertices with a numpy Generator seeded
from the shape id, so a given id always produces the same wobble:

    rng = np.random.default_rng(hashing.seed_from_string(shape_id))

Note: Module named `hashing.py` to avoid shadowing builtin `hash()`.
"""

import hashlib

import numpy as np


def sha256_string(s: str) -> str:
    """Compute SHA-256 hash of string.

    Parameters
    ----------
    s : str
        String to hash

    Returns
    -------
    str
        SHA-256 hex digest (64 characters)
    """
    sha256 = hashlib.sha256()
    sha256.update(s.encode('utf-8'))
    return sha256.hexdigest()


def sha256_array(a: np.ndarray) -> str:
    """Compute SHA-256 hash of array values.

    Parameters
    ----------
    a : np.ndarray
        Array to hash (any shape, dtype)

    Returns
    -------
    str
        SHA-256 hex digest (64 characters)

    Notes
    -----
    Same values → same hash. Invariant to memory layout but NOT to
    dtype/shape. Used to check that repeated outline builds are
    byte-identical.
    """
    sha256 = hashlib.sha256()
    sha256.update(np.ascontiguousarray(a).tobytes())
    return sha256.hexdigest()


def seed_from_string(s: str) -> int:
    """Derive a non-negative 64-bit integer seed from a string.

    Parameters
    ----------
    s : str
        Seed string (typically a shape id)

    Returns
    -------
    int
        First 8 bytes of SHA-256(s) as big-endian unsigned integer

    Examples
    --------
    >>> seed_from_string("shape:abc") == seed_from_string("shape:abc")
    True
    """
    return int(sha256_string(s)[:16], 16)
