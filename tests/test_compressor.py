import hashlib

import pytest

from conftest import decrypt_word, encrypt_word
from fhe_sha256.client import message_bits
from fhe_sha256.compressor import compress, expand_schedule
from fhe_sha256.constants import H
from fhe_sha256.driver import initial_state, split_blocks
from fhe_sha256.errors import ShapeError
from tests_support import plain_schedule


def encrypt_block(keys, words):
    return [encrypt_word(keys, w) for w in words]


def test_expand_schedule(keys, engine, rng):
    words = [rng.getrandbits(32) for _ in range(16)]
    schedule = expand_schedule(engine, encrypt_block(keys, words))
    assert len(schedule) == 64
    assert [decrypt_word(keys, w) for w in schedule] == plain_schedule(words)


def test_initial_state_is_public(keys, engine):
    assert [decrypt_word(keys, w) for w in initial_state(engine)] == H


def test_compress_single_block(keys, engine):
    bits = [keys.client.encrypt(bit) for bit in message_bits(b"abc")]
    (block,) = split_blocks(bits)
    state = compress(engine, initial_state(engine), block)
    digest = b"".join(decrypt_word(keys, w).to_bytes(4, "big") for w in state)
    assert digest == hashlib.sha256(b"abc").digest()


def test_compress_rejects_bad_shapes(keys, engine):
    block = encrypt_block(keys, range(16))
    with pytest.raises(ShapeError):
        compress(engine, initial_state(engine)[:7], block)
    with pytest.raises(ShapeError):
        compress(engine, initial_state(engine), block[:15])
    with pytest.raises(ShapeError):
        compress(engine, initial_state(engine), block[:15] + [block[15][:31]])
    assert engine.stats.total == 0
