"""TF-IDF cosine similarity between two matter descriptions."""

from __future__ import annotations

import re
from collections import Counter

import numpy as np

_NON_WORD_RE = re.compile(r"[^\w\s]")


def tokenize(text: str) -> list[str]:
    return _NON_WORD_RE.sub(" ", text.lower()).split()


def _weights(
    tf: Counter[str], total: int, vocab: list[str], idf: np.ndarray
) -> np.ndarray:
    freqs = np.array([tf[term] / total for term in vocab], dtype=np.float64)
    return freqs * idf


def text_similarity(text1: str, text2: str, symmetric: bool = True) -> float:
    """Cosine similarity of TF-IDF vectors over a two-document corpus.

    With `symmetric=False` only terms from `text1` are weighted, so the
    result can differ when the arguments are swapped.
    """
    words1 = tokenize(text1 or "")
    words2 = tokenize(text2 or "")
    if not words1 or not words2:
        return 0.0

    tf1 = Counter(words1)
    tf2 = Counter(words2)

    if symmetric:
        vocab = sorted(tf1.keys() | tf2.keys())
    else:
        vocab = list(tf1.keys())

    # Smoothed idf keeps shared terms non-zero in a 2-document corpus
    n_docs = 2
    df = np.array([(term in tf1) + (term in tf2) for term in vocab], dtype=np.float64)
    idf = np.log((1 + n_docs) / (1 + df)) + 1.0

    v1 = _weights(tf1, len(words1), vocab, idf)
    v2 = _weights(tf2, len(words2), vocab, idf)

    norm1 = np.linalg.norm(v1)
    norm2 = np.linalg.norm(v2)
    if norm1 == 0 or norm2 == 0:
        return 0.0

    return float(np.clip(np.dot(v1, v2) / (norm1 * norm2), 0.0, 1.0))
