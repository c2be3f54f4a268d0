"""
Core alignment and verification components.
"""

from crossquote.core.normalizer import normalize, fold
from crossquote.core.segmenter import segment, split_sentences
from crossquote.core.matcher import compute_coverage, lexical_signature, prefix_containment
from crossquote.core.strategies import (
    STRATEGY_CHAIN,
    AlignmentContext,
    character_offset_match,
    lead_span_match,
    proportional_sentence_match,
)
from crossquote.core.confidence import classify_confidence, validation_confidence
from crossquote.core.aligner import Aligner, align_excerpt, get_alignment_stats
from crossquote.core.verifier import CorpusSnapshot, verify

__all__ = [
    "normalize",
    "fold",
    "segment",
    "split_sentences",
    "prefix_containment",
    "lexical_signature",
    "compute_coverage",
    "AlignmentContext",
    "STRATEGY_CHAIN",
    "proportional_sentence_match",
    "character_offset_match",
    "lead_span_match",
    "classify_confidence",
    "validation_confidence",
    "Aligner",
    "align_excerpt",
    "get_alignment_stats",
    "CorpusSnapshot",
    "verify",
]
