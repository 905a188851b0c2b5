"""SHA-256 message schedule and compression function over encrypted words."""
import logging

from .adder import add, add_many
from .constants import K, ROUNDS, STATE_WORDS, WORDS_PER_BLOCK
from .errors import ShapeError
from .gates import check_word
from .words import big_sigma0, big_sigma1, ch, maj, sigma0, sigma1, trivial_word

logger = logging.getLogger(__name__)


def check_words(words, count, name):
    if len(words) != count:
        raise ShapeError(f"{name} must have {count} words, got {len(words)}")
    for i, word in enumerate(words):
        check_word(word, f"{name}[{i}]")
    return words


def expand_schedule(engine, block):
    """Expand the 16 block words into the 64 schedule words W[0..63]."""
    check_words(block, WORDS_PER_BLOCK, "block")
    w = list(block)
    for t in range(WORDS_PER_BLOCK, ROUNDS):
        w.append(add_many(engine, sigma1(engine, w[t - 2]), w[t - 7], sigma0(engine, w[t - 15]), w[t - 16]))
    return w


def main_loop(engine, state, k, w):
    a, b, c, d, e, f, g, h = state
    temp1 = add_many(engine, h, big_sigma1(engine, e), ch(engine, e, f, g), k, w)
    temp2 = add(engine, big_sigma0(engine, a), maj(engine, a, b, c))
    return [add(engine, temp1, temp2), a, b, c, add(engine, d, temp1), e, f, g]


def compress(engine, state, block):
    """Run the 64 rounds on one block and feed the input state forward."""
    check_words(state, STATE_WORDS, "state")
    w = expand_schedule(engine, block)
    k = [trivial_word(engine, value) for value in K]

    args = state
    for t in range(ROUNDS):
        args = main_loop(engine, args, k[t], w[t])
        if t % 16 == 15:
            logger.debug("round %d done, %s", t + 1, engine.stats)

    # Davies-Meyer feed-forward
    return [add(engine, before, after) for before, after in zip(state, args)]
