"""
Negotiation, eligibility tables, codecs and response buffering.
"""
from .algorithms import (
    Algorithm,
    SupportedAlgorithms,
    build_supported_algorithms,
    EligibilityRule,
    EligibilityRules,
    SUPPORTED_ALGORITHMS,
    DEFAULT_ELIGIBILITY_RULES,
    DeflateWriter,
    open_compressor,
)
from .negotiation import (
    parse_accept_encoding,
    select_algorithm,
    media_type,
    is_eligible,
    copy_supported_algorithms,
    build_eligibility_rules,
    Negotiator,
)
from .buffering import ResponseCapture, copy_to_sink, DEFAULT_CHUNK_SIZE

__all__ = [
    'Algorithm', 'SupportedAlgorithms', 'build_supported_algorithms',
    'EligibilityRule', 'EligibilityRules',
    'SUPPORTED_ALGORITHMS', 'DEFAULT_ELIGIBILITY_RULES',
    'DeflateWriter', 'open_compressor',
    'parse_accept_encoding', 'select_algorithm', 'media_type', 'is_eligible',
    'copy_supported_algorithms', 'build_eligibility_rules', 'Negotiator',
    'ResponseCapture', 'copy_to_sink', 'DEFAULT_CHUNK_SIZE',
]
