"""Modulo 2^32 addition of encrypted words.

The adder runs in two phases. The propagate/generate phase is two fully
parallel gate batches. The carry phase resolves, for every bit, whether a
carry comes in from the less significant bits; it is the critical path.

Two carry networks are available:

``ripple``
    ``carry[i] = generate[i+1] OR (propagate[i+1] AND carry[i+1])`` from
    bit 30 down to bit 0: 62 gates, all sequential.
``prefix``
    Kogge-Stone parallel prefix: 5 levels of 3 parallel batches each.
"""
from functools import reduce

from .backends.base import TRIVIAL_FALSE
from .constants import WORD_SIZE
from .gates import check_word
from .words import shift_left


def ripple_carry(engine, propagate, generate):
    carry = [TRIVIAL_FALSE] * WORD_SIZE
    # Index 31 is the least significant bit, nothing carries into it
    for i in range(WORD_SIZE - 2, -1, -1):
        carry[i] = engine.or_bit(generate[i + 1], engine.and_bit(propagate[i + 1], carry[i + 1]))
    return carry


def prefix_carry(engine, propagate, generate):
    # g[i], p[i] end up describing the span from bit i down to bit 31
    g, p = generate, propagate
    distance = 1
    while distance < WORD_SIZE:
        g = engine.or_(g, engine.and_(p, shift_left(g, distance)))
        p = engine.and_(p, shift_left(p, distance))
        distance *= 2
    return shift_left(g, 1)


CARRY_NETWORKS = {
    "ripple": ripple_carry,
    "prefix": prefix_carry,
}


def add(engine, a, b):
    check_word(a, "a")
    check_word(b, "b")
    propagate = engine.xor(a, b)
    generate = engine.and_(a, b)
    carry = CARRY_NETWORKS[engine.carry](engine, propagate, generate)
    return engine.xor(propagate, carry)


def add_many(engine, *words):
    return reduce(lambda acc, word: add(engine, acc, word), words)
