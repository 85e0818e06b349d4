"""Enumeration of harmonic nodes up to a maximum harmonic order.

Only primitive nodes are produced: for order h, node k is kept iff
gcd(k, h) == 1. A reducible node such as 2/4 lies on the same spot as 1/2
and sounds the same partial, so it is skipped. Nodes of different orders
that happen to coincide are kept, since they are distinct touch techniques.
"""

from __future__ import annotations

import logging
from math import gcd
from typing import Generator, List, Tuple

from fretwork.base import ConfigurationRangeError
from fretwork.touch import FrettedPosition, HarmonicNode, check_node


def harmonic_pairs(max_order: int) -> Generator[Tuple[int, int], None, None]:
    """Yield every primitive ``(node, order)`` pair up to ``max_order``.

    Pairs come in increasing order, then increasing node number.

    Args:
        max_order: The highest harmonic order to include.

    Yields:
        Tuples of (node, order) with 1 <= node < order <= max_order and
        gcd(node, order) == 1.

    Raises:
        ConfigurationRangeError: If ``max_order`` is below 1.
    """
    if max_order < 1:
        raise ConfigurationRangeError("max_harmonic_order", max_order, low=1)
    for order in range(2, max_order + 1):
        for node in range(1, order):
            if gcd(node, order) == 1:
                yield (node, order)


def totient(n: int) -> int:
    """Euler's totient: how many integers in [1, n] are coprime with n."""
    if n < 1:
        raise ValueError(f"totient undefined for {n}")
    result = n
    rest = n
    p = 2
    while p * p <= rest:
        if rest % p == 0:
            while rest % p == 0:
                rest //= p
            result -= result // p
        p += 1
    if rest > 1:
        result -= result // rest
    return result


def node_count(max_order: int) -> int:
    """Number of nodes generated per root fret for ``max_order``."""
    return sum(totient(order) for order in range(2, max_order + 1))


def generate_nodes(root: FrettedPosition, max_order: int) -> List[HarmonicNode]:
    """Create all harmonic nodes for one pressed root fret.

    With the root at fret 0 these are the natural harmonics of the string;
    any other root gives the artificial harmonics of that fret.

    Args:
        root: The pressed fret the nodes are measured from.
        max_order: The highest harmonic order to include.

    Returns:
        The nodes in generation order.
    """
    nodes: List[HarmonicNode] = []
    for node, order in harmonic_pairs(max_order):
        check_node(node, order)
        nodes.append(HarmonicNode(root, node, order))
    logging.debug(
        "generated %d nodes up to order %d on fret %d", len(nodes), max_order, root.fret
    )
    return nodes
