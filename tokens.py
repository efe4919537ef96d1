import logging

import tiktoken

"""
Token cost estimators. Anything with an estimate(text) -> int method can be
handed to the budget manager.
"""

class WordCountEstimator:
    """
    Counts whitespace-delimited words. This is a rough approximation of a
    model's tokenizer, not an exact count; swap in TiktokenEstimator when
    budget precision matters.
    """
    def estimate(self, text) -> int:
        if not text:
            return 0
        return len(text.split())


class TiktokenEstimator:
    """Counts tokens with the tiktoken encoding used by the given model."""
    def __init__(self, model_name="gpt-4o-mini"):
        try:
            self.encoder = tiktoken.encoding_for_model(model_name)
        except KeyError:
            logging.warning("No tiktoken encoding registered for %s; falling back to o200k_base", model_name)
            self.encoder = tiktoken.get_encoding("o200k_base")

    def estimate(self, text) -> int:
        if not text:
            return 0
        return len(self.encoder.encode(text, disallowed_special=()))


def build_estimator(kind: str, model_name: str):
    """Returns the estimator named by configuration ("words" or "tiktoken")."""
    if kind == "words":
        return WordCountEstimator()
    if kind == "tiktoken":
        return TiktokenEstimator(model_name)
    raise ValueError(f"Unknown token estimator: {kind!r}")
