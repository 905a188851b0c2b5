"""Parallel evaluation of homomorphic gates over encrypted bit vectors.

Every batch operation treats its bit positions ("lanes") as independent: the
lanes are split into contiguous chunks, the chunks are evaluated on a thread
pool, and the results are put back in positional order before returning.

Gates with a public (trivial) operand are folded here and never reach the
backend, e.g. ``x AND 0 = 0`` and ``x XOR 1 = NOT x``.
"""
import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field

from .backends.base import TRIVIAL_FALSE, TRIVIAL_TRUE, ServerKey, TrivialBit, trivial_bit
from .config import CARRY_STRATEGIES
from .constants import DEFAULT_WORKERS, WORD_SIZE
from .errors import ConfigurationError, FheShaError, GateBatchError, ShapeError

logger = logging.getLogger(__name__)


def check_word(word, name="word"):
    if len(word) != WORD_SIZE:
        raise ShapeError(f"{name} must have {WORD_SIZE} bits, got {len(word)}")
    return word


# Folding rules. Each returns (bit, gate) where gate names the backend gate
# that was evaluated, or None when the result was derived from public values.

def fold_and(key, a, b):
    if isinstance(a, TrivialBit):
        a, b = b, a
    if isinstance(a, TrivialBit):
        return trivial_bit(a.value and b.value), None
    if isinstance(b, TrivialBit):
        return (a if b.value else TRIVIAL_FALSE), None
    return key.and_(a, b), "and"


def fold_or(key, a, b):
    if isinstance(a, TrivialBit):
        a, b = b, a
    if isinstance(a, TrivialBit):
        return trivial_bit(a.value or b.value), None
    if isinstance(b, TrivialBit):
        return (TRIVIAL_TRUE if b.value else a), None
    return key.or_(a, b), "or"


def fold_xor(key, a, b):
    if isinstance(a, TrivialBit):
        a, b = b, a
    if isinstance(a, TrivialBit):
        return trivial_bit(a.value != b.value), None
    if isinstance(b, TrivialBit):
        return (key.not_(a), "not") if b.value else (a, None)
    return key.xor(a, b), "xor"


def fold_not(key, a):
    if isinstance(a, TrivialBit):
        return trivial_bit(not a.value), None
    return key.not_(a), "not"


@dataclass
class GateStats:
    gates: Counter = field(default_factory=Counter)
    batches: int = 0
    # Gates evaluated one at a time, outside any batch
    sequential: int = 0

    @property
    def total(self):
        return sum(self.gates.values())

    def record(self, tally, batched=True):
        self.gates.update(tally)
        if batched:
            self.batches += 1
        else:
            self.sequential += sum(tally.values())

    def reset(self):
        self.gates.clear()
        self.batches = 0
        self.sequential = 0

    def __str__(self):
        kinds = ", ".join(f"{kind}={count}" for kind, count in sorted(self.gates.items()))
        return f"{self.total} gates ({kinds or 'none'}), {self.batches} batches, {self.sequential} sequential"


class GateEngine:
    """Evaluates AND/OR/XOR/NOT over encrypted words with a shared server key.

    The server key is read-only and used from every worker thread at once.
    ``workers`` is the number of lane chunks per batch; 1 evaluates inline.
    """

    def __init__(self, server_key, workers=DEFAULT_WORKERS, carry="ripple"):
        if not isinstance(server_key, ServerKey):
            raise ConfigurationError(f"expected a ServerKey, got {type(server_key).__name__}")
        # Chunks must tile the word evenly, as in EngineConfig.validate
        if workers < 1 or WORD_SIZE % workers:
            raise ConfigurationError(f"workers must be a divisor of {WORD_SIZE}, got {workers}")
        if carry not in CARRY_STRATEGIES:
            raise ConfigurationError(f"unknown carry strategy {carry!r}")
        self.server_key = server_key
        self.workers = workers
        self.carry = carry
        self.stats = GateStats()
        self._executor = None
        if workers > 1:
            self._executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="fhe-gate")
        logger.debug("gate engine ready: %s server key, %d workers, %s carry", server_key.name, workers, carry)

    @classmethod
    def from_config(cls, server_key, config):
        config = config.validate()
        return cls(server_key, workers=config.workers, carry=config.carry)

    def close(self):
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _chunks(self, lanes):
        size = -(-lanes // self.workers)
        return [(start, min(start + size, lanes)) for start in range(0, lanes, size)]

    def _evaluate(self, fold, operands, start, stop):
        tally = Counter()
        out = []
        for i in range(start, stop):
            bit, gate = fold(self.server_key, *(operand[i] for operand in operands))
            if gate is not None:
                tally[gate] += 1
            out.append(bit)
        return out, tally

    def batch(self, fold, *operands):
        """Apply ``fold`` lane-wise over equally long bit vectors."""
        lanes = len(operands[0])
        if any(len(operand) != lanes for operand in operands):
            raise ShapeError("operands of a gate batch must have the same length")
        if lanes == 0:
            return []
        chunks = self._chunks(lanes)
        if self._executor is None:
            try:
                parts = [self._evaluate(fold, operands, start, stop) for start, stop in chunks]
            except FheShaError:
                raise
            except Exception as exc:
                raise GateBatchError(f"gate lane failed: {exc!r}") from exc
        else:
            futures = [self._executor.submit(self._evaluate, fold, operands, start, stop)
                       for start, stop in chunks]
            # Join every lane before surfacing a failure
            wait(futures)
            parts = []
            for future in futures:
                exc = future.exception()
                if isinstance(exc, FheShaError):
                    raise exc
                if exc is not None:
                    raise GateBatchError(f"gate lane failed: {exc!r}") from exc
                parts.append(future.result())
        result = []
        tally = Counter()
        for bits, part_tally in parts:
            result.extend(bits)
            tally.update(part_tally)
        self.stats.record(tally)
        return result

    def _single(self, fold, *operands):
        try:
            bit, gate = fold(self.server_key, *operands)
        except FheShaError:
            raise
        except Exception as exc:
            raise GateBatchError(f"gate failed: {exc!r}") from exc
        if gate is not None:
            self.stats.record(Counter({gate: 1}), batched=False)
        return bit

    def xor(self, a, b):
        return self.batch(fold_xor, check_word(a, "a"), check_word(b, "b"))

    def and_(self, a, b):
        return self.batch(fold_and, check_word(a, "a"), check_word(b, "b"))

    def or_(self, a, b):
        return self.batch(fold_or, check_word(a, "a"), check_word(b, "b"))

    def not_(self, a):
        return self.batch(fold_not, check_word(a, "a"))

    def xor_bit(self, a, b):
        return self._single(fold_xor, a, b)

    def and_bit(self, a, b):
        return self._single(fold_and, a, b)

    def or_bit(self, a, b):
        return self._single(fold_or, a, b)

    def not_bit(self, a):
        return self._single(fold_not, a)

    def trivial(self, bits):
        """Trivially encrypt 32 public bits."""
        return [trivial_bit(bit) for bit in check_word(bits, "bits")]
