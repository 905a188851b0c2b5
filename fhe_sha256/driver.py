"""Runs the compression function over every block of an encrypted message."""
import logging
import time

from .compressor import check_words, compress
from .constants import BLOCK_SIZE, H, WORD_SIZE, WORDS_PER_BLOCK
from .errors import ShapeError
from .words import trivial_word

logger = logging.getLogger(__name__)


def split_blocks(bits):
    """Split a flat padded bit sequence into blocks of 16 words of 32 bits."""
    if not bits or len(bits) % BLOCK_SIZE:
        raise ShapeError(f"padded input must be a positive multiple of {BLOCK_SIZE} bits, got {len(bits)}")
    bits = list(bits)
    return [
        [bits[start + j * WORD_SIZE:start + (j + 1) * WORD_SIZE] for j in range(WORDS_PER_BLOCK)]
        for start in range(0, len(bits), BLOCK_SIZE)
    ]


def initial_state(engine):
    return [trivial_word(engine, value) for value in H]


def hash_blocks(engine, blocks):
    """Thread the hash state through every block, starting from the IV."""
    blocks = list(blocks)
    # Reject every malformed block before the first gate runs
    for i, block in enumerate(blocks):
        check_words(block, WORDS_PER_BLOCK, f"blocks[{i}]")
    state = initial_state(engine)
    for i, block in enumerate(blocks):
        start = time.perf_counter()
        state = compress(engine, state, block)
        logger.debug("block %d/%d compressed in %.2fs", i + 1, len(blocks), time.perf_counter() - start)
    return state


def sha256_fhe(engine, bits):
    """Encrypted SHA-256 of a padded, encrypted message.

    Returns the 256 encrypted digest bits, most significant first.
    """
    blocks = split_blocks(bits)
    start = time.perf_counter()
    state = hash_blocks(engine, blocks)
    logger.info("hashed %d block(s) in %.2fs: %s", len(blocks), time.perf_counter() - start, engine.stats)
    return [bit for word in state for bit in word]
