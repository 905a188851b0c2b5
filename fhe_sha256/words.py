"""Operations on 32-bit encrypted words.

A word is a list of 32 encrypted bits, index 0 being the most significant.
Rotations and shifts only move bits around and cost no gates; the sigma, ch
and maj functions are compositions of gate batches.
"""
import numpy as np

from .backends.base import TRIVIAL_FALSE
from .constants import WORD_SIZE
from .gates import check_word


def int_to_bits(value):
    """32-bit integer -> list of bools, most significant first."""
    if not 0 <= value < 2 ** WORD_SIZE:
        raise ValueError(f"{value} does not fit in {WORD_SIZE} bits")
    return [bool(b) for b in np.unpackbits(np.array([value], dtype=">u4").view(np.uint8))]


def bits_to_int(bits):
    check_word(bits, "bits")
    return int(np.packbits(np.array([bool(b) for b in bits], dtype=np.uint8)).view(">u4")[0])


def trivial_word(engine, value):
    return engine.trivial(int_to_bits(value))


def rotate_right(x, n):
    check_word(x, "x")
    n %= WORD_SIZE
    return x[WORD_SIZE - n:] + x[:WORD_SIZE - n]


def check_shift(n):
    if not 0 <= n <= WORD_SIZE:
        raise ValueError(f"shift amount must be in 0..{WORD_SIZE}, got {n}")


def shift_right(x, n):
    check_word(x, "x")
    check_shift(n)
    return [TRIVIAL_FALSE] * n + x[:WORD_SIZE - n]


def shift_left(x, n):
    check_word(x, "x")
    check_shift(n)
    return x[n:] + [TRIVIAL_FALSE] * n


# Used in the expansion

def sigma0(engine, x):
    return engine.xor(engine.xor(rotate_right(x, 7), rotate_right(x, 18)), shift_right(x, 3))


def sigma1(engine, x):
    return engine.xor(engine.xor(rotate_right(x, 17), rotate_right(x, 19)), shift_right(x, 10))


# Used in main loop

def big_sigma0(engine, x):
    return engine.xor(engine.xor(rotate_right(x, 2), rotate_right(x, 13)), rotate_right(x, 22))


def big_sigma1(engine, x):
    return engine.xor(engine.xor(rotate_right(x, 6), rotate_right(x, 11)), rotate_right(x, 25))


def ch(engine, x, y, z):
    return engine.xor(engine.and_(x, y), engine.and_(engine.not_(x), z))


def maj(engine, x, y, z):
    return engine.xor(engine.xor(engine.and_(x, y), engine.and_(x, z)), engine.and_(y, z))
