# compression/algorithms.py
"""
Compression algorithms, the supported-algorithm table and the codecs.

The default table and eligibility list are built once, when this module is
first imported, and are read-only afterwards.
"""
import gzip
import zlib
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import BinaryIO, Iterable, Mapping, Optional, Tuple, Union

from ..core.exceptions import UnsupportedAlgorithmError


class Algorithm(str, Enum):
    """Outcome of encoding negotiation."""

    NONE = "none"
    GZIP = "gzip"
    DEFLATE = "deflate"

    @property
    def token(self) -> str:
        """The lowercase HTTP token; empty for ``NONE``."""
        return "" if self is Algorithm.NONE else self.value


SupportedAlgorithms = Mapping[str, Algorithm]


def build_supported_algorithms(
    algorithms: Optional[Iterable[Union[Algorithm, str]]] = None
) -> SupportedAlgorithms:
    """
    Build an immutable token -> Algorithm table.

    Args:
        algorithms: Algorithms (or their tokens) to offer. Defaults to every
            algorithm. The empty token always maps to ``Algorithm.NONE``.

    Raises:
        UnsupportedAlgorithmError: If a token names no known algorithm.
    """
    if algorithms is None:
        algorithms = list(Algorithm)

    table = {"": Algorithm.NONE}
    for item in algorithms:
        if not isinstance(item, Algorithm):
            token = str(item).strip().lower()
            try:
                item = Algorithm(token)
            except ValueError as e:
                raise UnsupportedAlgorithmError(
                    f"Unknown compression algorithm: {token!r}",
                    context={"token": token},
                    original_exception=e,
                ) from e
        table[item.token] = item

    return MappingProxyType(table)


@dataclass(frozen=True)
class EligibilityRule:
    """A content-type pattern and whether matching responses may be compressed."""

    pattern: str
    eligible: bool = True


EligibilityRules = Tuple[EligibilityRule, ...]


SUPPORTED_ALGORITHMS: SupportedAlgorithms = build_supported_algorithms()

DEFAULT_ELIGIBILITY_RULES: EligibilityRules = (
    EligibilityRule("text/*", True),
    EligibilityRule("message/*", True),
    EligibilityRule("application/javascript", True),
    EligibilityRule("application/json", True),
    EligibilityRule("*/*", False),
)


class DeflateWriter:
    """
    Write-only stream producing zlib-wrapped deflate data into ``fileobj``.

    Like ``gzip.GzipFile`` given a ``fileobj``, closing the writer flushes the
    codec but leaves ``fileobj`` open.
    """

    def __init__(self, fileobj: BinaryIO, level: int = 6):
        self.fileobj = fileobj
        self._compressor = zlib.compressobj(level)
        self.closed = False

    def write(self, data: bytes) -> int:
        if self.closed:
            raise ValueError("write to closed DeflateWriter")
        chunk = self._compressor.compress(data)
        if chunk:
            self.fileobj.write(chunk)
        return len(data)

    def close(self) -> None:
        if self.closed:
            return
        self.fileobj.write(self._compressor.flush())
        self.closed = True

    def __enter__(self) -> "DeflateWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def open_compressor(algorithm: Algorithm, fileobj: BinaryIO, level: int = 6):
    """
    Open a compression stream writing into ``fileobj``.

    The returned stream wraps ``fileobj`` without owning it: closing the
    stream writes the trailer (gzip CRC/size, zlib checksum) and leaves
    ``fileobj`` open for reading.

    Raises:
        UnsupportedAlgorithmError: For ``Algorithm.NONE``.
    """
    if algorithm is Algorithm.GZIP:
        return gzip.GzipFile(fileobj=fileobj, mode="wb", compresslevel=level)
    if algorithm is Algorithm.DEFLATE:
        return DeflateWriter(fileobj, level=level)
    raise UnsupportedAlgorithmError(
        f"No codec for algorithm {algorithm!r}",
        context={"algorithm": algorithm},
    )


__all__ = [
    'Algorithm', 'SupportedAlgorithms', 'build_supported_algorithms',
    'EligibilityRule', 'EligibilityRules',
    'SUPPORTED_ALGORITHMS', 'DEFAULT_ELIGIBILITY_RULES',
    'DeflateWriter', 'open_compressor',
]
