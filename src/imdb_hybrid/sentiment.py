"""Lexicon based sentiment for movie overviews.

Each overview is tokenized into lowercase words and the polarity of every
word is looked up in a fixed lexicon; the document score is the plain sum.
Words the lexicon does not know contribute 0, so an empty overview scores 0.

If the scoring step does not return exactly one value per overview, the
whole output is replaced by the mean of the values it did return. This is a
deliberate degrade-to-neutral approximation, not per-record imputation.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping, Sequence
from functools import lru_cache

import pandas as pd
from sklearn.feature_extraction.text import CountVectorizer
from textblob import TextBlob

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def textblob_polarity(word: str) -> float:
    """Polarity of a single word in TextBlob's pattern lexicon (0.0 if unknown)."""
    return float(TextBlob(word).sentiment.polarity)


def _tokenizer() -> Callable[[str], list[str]]:
    return CountVectorizer(lowercase=True).build_analyzer()


class SentimentScorer:
    def __init__(
        self,
        lexicon: Mapping[str, float] | None = None,
        analyzer: Callable[[Sequence[str]], Sequence[float]] | None = None,
    ):
        self.lexicon = lexicon
        self._tokenize = _tokenizer()
        self._analyzer = analyzer or self.score_documents

    def word_polarity(self, word: str) -> float:
        if self.lexicon is None:
            return textblob_polarity(word)
        return float(self.lexicon.get(word, 0.0))

    def score_text(self, text: str | None) -> float:
        if text is None or pd.isna(text) or not str(text).strip():
            return 0.0
        return float(sum(self.word_polarity(tok) for tok in self._tokenize(str(text))))

    def score_documents(self, texts: Sequence[str]) -> list[float]:
        return [self.score_text(t) for t in texts]

    def score(self, texts: Sequence[str]) -> list[float]:
        texts = list(texts)
        produced = [float(s) for s in self._analyzer(texts)]
        finite = [s for s in produced if math.isfinite(s)]
        if len(produced) == len(texts) and len(finite) == len(produced):
            return produced
        fallback = sum(finite) / len(finite) if finite else 0.0
        logger.warning(
            "Sentiment scoring returned %d finite values for %d overviews; "
            "using catalog mean %.4f for every record",
            len(finite),
            len(texts),
            fallback,
        )
        return [fallback] * len(texts)


def add_sentiment(catalog: pd.DataFrame, scorer: SentimentScorer | None = None) -> pd.DataFrame:
    scorer = scorer or SentimentScorer()
    out = catalog.copy()
    texts = out["overview"].fillna("").astype(str).tolist()
    out["sentiment"] = pd.Series(scorer.score(texts), index=out.index, dtype="float64")
    return out
