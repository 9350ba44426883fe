"""Token count estimation without an external tokenizer.

~4 characters per token is the usual average for English prose. The min/max
band (5 and 3 characters per token) gives callers a guard-band when they
budget a context window.
"""

from __future__ import annotations

import math

from collectiv.models import TokenEstimate


def estimate_tokens(text: str) -> TokenEstimate:
    """Approximate the token count of *text*.

    >>> estimate_tokens("")
    TokenEstimate(approximate=0, min=0, max=0)
    """
    n = len(text)
    return TokenEstimate(
        approximate=math.ceil(n / 4),
        min=math.ceil(n / 5),
        max=math.ceil(n / 3),
    )


def count_tokens(text: str) -> int:
    return estimate_tokens(text).approximate
