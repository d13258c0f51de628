"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements file fingerprinting using pluggable streaming hash algorithms.

- Quick hash: first N bytes of a file, xxHash64 by default. Only a filter.
- Full hash: whole file content, BLAKE3 by default. Decides duplication.

Both read through a fixed-size buffer, so memory never grows with file size.
Read errors are raised as OSError and handled by the grouper.
"""

import blake3
import xxhash

from ducky.core.interfaces import HashAlgorithm, Hasher, HashState
from ducky.core.models import FileDescriptor

QUICK_READ_BUFFER = 64 * 1024       # 64 KiB
FULL_HASH_CHUNK_SIZE = 1024 * 1024  # 1 MiB


# Use the same way to implement and use any other hashing algorithm
class XXHashAlgorithmImpl(HashAlgorithm):
    name = "xxh64"

    @staticmethod
    def new() -> HashState:
        return xxhash.xxh64()


class Blake3AlgorithmImpl(HashAlgorithm):
    name = "blake3"

    @staticmethod
    def new() -> HashState:
        return blake3.blake3()


class HasherImpl(Hasher):
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    The full-hash algorithm must be collision resistant; the quick one only needs speed.
    """

    def __init__(
            self,
            quick_algorithm: HashAlgorithm = None,
            full_algorithm: HashAlgorithm = None,
            chunk_size: int = FULL_HASH_CHUNK_SIZE
    ):
        self.quick_algorithm = quick_algorithm or XXHashAlgorithmImpl()
        self.full_algorithm = full_algorithm or Blake3AlgorithmImpl()
        self.chunk_size = chunk_size

    def compute_quick_hash(self, file: FileDescriptor, limit: int) -> bytes:
        """Hash the first `limit` bytes (the whole file if it is smaller)."""
        state = self.quick_algorithm.new()
        left = limit
        with open(file.path, 'rb') as f:
            while left > 0:
                data = f.read(min(QUICK_READ_BUFFER, left))
                if not data:
                    break
                state.update(data)
                left -= len(data)
        return state.digest()

    def compute_full_hash(self, file: FileDescriptor) -> bytes:
        """Hash the complete content, streamed in fixed-size chunks."""
        state = self.full_algorithm.new()
        with open(file.path, 'rb') as f:
            for chunk in iter(lambda: f.read(self.chunk_size), b""):
                state.update(chunk)
        return state.digest()
