# compression/negotiation.py
"""
Encoding negotiation and content-type eligibility.

Both decisions are pure functions of their inputs and the tables passed in.
"""
import re
from functools import lru_cache
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional

from starlette.datastructures import Headers

from ..core.exceptions import ConfigurationError, UnsupportedAlgorithmError
from .algorithms import (
    Algorithm,
    DEFAULT_ELIGIBILITY_RULES,
    EligibilityRule,
    EligibilityRules,
    SUPPORTED_ALGORITHMS,
    SupportedAlgorithms,
    build_supported_algorithms,
)

ACCEPT_ENCODING_HEADER = "accept-encoding"


def parse_accept_encoding(value: str) -> List[str]:
    """
    Split an Accept-Encoding value into lowercase tokens, in header order.

    Parameters such as ``;q=0.5`` are dropped, not honoured.
    """
    tokens = []
    for part in value.split(","):
        token = part.split(";", 1)[0].strip().lower()
        if token:
            tokens.append(token)
    return tokens


def select_algorithm(
    headers: Mapping[str, str],
    supported: SupportedAlgorithms = SUPPORTED_ALGORITHMS,
) -> Algorithm:
    """
    Pick the algorithm for the first Accept-Encoding token the table knows.

    Returns the table's entry for the empty token (``Algorithm.NONE``) when the
    header is absent or no token is supported.
    """
    if isinstance(headers, Headers):
        accept_encoding = headers.get(ACCEPT_ENCODING_HEADER)
    else:
        # values of a plain mapping need not be latin-1 encodable
        accept_encoding = next(
            (value for name, value in headers.items() if name.lower() == ACCEPT_ENCODING_HEADER),
            None,
        )
    if accept_encoding is None:
        return Algorithm.NONE

    for token in parse_accept_encoding(accept_encoding):
        if token in supported:
            return supported[token]
    return supported[""]


@lru_cache(maxsize=256)
def _compile_pattern(pattern: str) -> re.Pattern:
    # '*' spans any run of characters, '/' included
    parts = [re.escape(part) for part in pattern.split("*")]
    return re.compile(".*".join(parts), re.IGNORECASE | re.DOTALL)


def media_type(content_type: Optional[str]) -> str:
    """Return the part of a Content-Type value before its parameters."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip()


def matches(pattern: str, content_type: str) -> bool:
    """Match a bare media type against a literal or wildcard pattern."""
    if "*" not in pattern:
        return pattern.lower() == content_type.lower()
    return _compile_pattern(pattern).fullmatch(content_type) is not None


def is_eligible(
    content_type: Optional[str],
    rules: EligibilityRules = DEFAULT_ELIGIBILITY_RULES,
) -> bool:
    """Return the flag of the first rule matching ``content_type``, else False."""
    bare = media_type(content_type)
    if not bare:
        return False

    for rule in rules:
        if matches(rule.pattern, bare):
            return rule.eligible
    return False


def copy_supported_algorithms(table: Mapping[str, Algorithm]) -> SupportedAlgorithms:
    """
    Make a private read-only copy of a caller-supplied token table.

    Tokens are kept as given (lowercased), so aliases such as ``x-gzip`` stay
    offered. The empty token falls back to ``Algorithm.NONE`` when missing.

    Raises:
        UnsupportedAlgorithmError: If a value is not an ``Algorithm``.
    """
    copy = {"": Algorithm.NONE}
    for token, algorithm in table.items():
        if not isinstance(algorithm, Algorithm):
            raise UnsupportedAlgorithmError(
                f"Table entry {token!r} maps to {algorithm!r}, not an Algorithm",
                context={"token": token, "algorithm": algorithm},
            )
        copy[token.strip().lower()] = algorithm
    return MappingProxyType(copy)


def build_eligibility_rules(patterns: Iterable[str]) -> EligibilityRules:
    """
    Turn caller-supplied content-type patterns into an eligibility list.

    Every pattern is eligible; order is preserved.

    Raises:
        ConfigurationError: If a pattern is empty.
    """
    rules = []
    for pattern in patterns:
        pattern = pattern.strip()
        if not pattern:
            raise ConfigurationError("Content-type patterns must not be empty")
        rules.append(EligibilityRule(pattern, True))
    return tuple(rules)


class Negotiator:
    """
    Decides which algorithm a request gets and whether a response qualifies.

    The table and the eligibility list are fixed at construction, so one
    instance can be shared by every concurrent request.
    """

    def __init__(
        self,
        supported_algorithms: Optional[SupportedAlgorithms] = None,
        eligibility_rules: Optional[Iterable[EligibilityRule]] = None,
    ):
        if supported_algorithms is None:
            supported_algorithms = SUPPORTED_ALGORITHMS
        elif supported_algorithms is not SUPPORTED_ALGORITHMS:
            supported_algorithms = copy_supported_algorithms(supported_algorithms)
        self._supported = supported_algorithms
        self._rules: EligibilityRules = (
            DEFAULT_ELIGIBILITY_RULES if eligibility_rules is None else tuple(eligibility_rules)
        )

    @classmethod
    def from_patterns(
        cls,
        patterns: Optional[Iterable[str]] = None,
        algorithms: Optional[Iterable] = None,
    ) -> "Negotiator":
        """Build a negotiator from plain content-type patterns and algorithm tokens."""
        supported = None if algorithms is None else build_supported_algorithms(algorithms)
        rules = None if patterns is None else build_eligibility_rules(patterns)
        return cls(supported_algorithms=supported, eligibility_rules=rules)

    @property
    def supported_algorithms(self) -> SupportedAlgorithms:
        return self._supported

    @property
    def eligibility_rules(self) -> EligibilityRules:
        return self._rules

    def select_algorithm(self, headers: Mapping[str, str]) -> Algorithm:
        return select_algorithm(headers, self._supported)

    def is_eligible(self, content_type: Optional[str]) -> bool:
        return is_eligible(content_type, self._rules)

    def __repr__(self) -> str:
        tokens = [token for token in self._supported if token]
        return f"<Negotiator algorithms={tokens} rules={len(self._rules)}>"


__all__ = [
    'ACCEPT_ENCODING_HEADER', 'parse_accept_encoding', 'select_algorithm',
    'media_type', 'matches', 'is_eligible', 'copy_supported_algorithms',
    'build_eligibility_rules', 'Negotiator',
]
