"""
Sampler - uniform random subsets of an in-memory record set
"""

import random
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")


def random_sample(
    items: Sequence[T], n: int, rng: Optional[random.Random] = None
) -> List[T]:
    """
    Pick n items without replacement using a partial Fisher-Yates shuffle.

    Every subset of size n is equally likely. The input is never modified;
    when n covers the whole input a copy of all items is returned.

    Args:
        items: Items to sample from
        n: Number of items wanted
        rng: Random source, defaults to the module-level generator

    Returns:
        List of min(n, len(items)) items
    """
    pool = list(items)
    if n >= len(pool):
        return pool
    if n <= 0:
        return []

    rng = rng or random
    last = len(pool) - 1
    for i in range(last, last - n, -1):
        j = rng.randint(0, i)
        pool[i], pool[j] = pool[j], pool[i]
    return pool[len(pool) - n:]
