import hashlib

import pytest

from fhe_sha256.backends import generate_keys
from fhe_sha256.client import bits_to_hex, decrypt_bits, encrypt_bits, hash_message, message_bits
from fhe_sha256.config import EngineConfig
from fhe_sha256.driver import hash_blocks, sha256_fhe, split_blocks
from fhe_sha256.errors import ShapeError
from fhe_sha256.gates import GateEngine

HELLO_WORLD = "b94d27b9934d3e08a52e52d7da7dabfac484efe37a5380ee9088f7ace2efcde9"
EMPTY = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_hello_world(keys):
    assert hash_message("hello world", keys=keys) == HELLO_WORLD


def test_empty_message(keys):
    assert hash_message(b"", keys=keys) == EMPTY


@pytest.mark.parametrize("length", [55, 56, 64])
def test_block_boundaries(keys, length):
    message = bytes(range(length))
    assert hash_message(message, keys=keys) == hashlib.sha256(message).hexdigest()


def test_two_blocks_prefix_carry(keys):
    message = b"The quick brown fox jumps over the lazy dog, twice over the lazy dog!"
    assert len(message_bits(message)) == 1024
    config = EngineConfig(carry="prefix", workers=4)
    assert hash_message(message, keys=keys, config=config) == hashlib.sha256(message).hexdigest()


def test_deterministic_under_fresh_randomness(keys):
    bits = message_bits("hello world")
    first = encrypt_bits(keys.client, bits)
    second = encrypt_bits(keys.client, bits)
    assert first != second
    with GateEngine(keys.server) as engine:
        digests = [bits_to_hex(decrypt_bits(keys.client, sha256_fhe(engine, ct))) for ct in (first, second)]
    assert digests == [HELLO_WORLD, HELLO_WORLD]


def test_fresh_keys_same_digest():
    other = generate_keys(EngineConfig(backend="clear"))
    assert hash_message("hello world", keys=other) == HELLO_WORLD


def test_digest_shape(keys):
    with GateEngine(keys.server) as engine:
        digest = sha256_fhe(engine, encrypt_bits(keys.client, message_bits("abc")))
    assert len(digest) == 256


@pytest.mark.parametrize("size", [0, 511, 513, 1000])
def test_split_blocks_rejects_unpadded(size):
    with pytest.raises(ShapeError):
        split_blocks([False] * size)


def test_split_blocks_layout():
    bits = list(range(1024))
    blocks = split_blocks(bits)
    assert len(blocks) == 2
    assert all(len(block) == 16 and all(len(w) == 32 for w in block) for block in blocks)
    assert blocks[1][0][0] == 512
    assert blocks[0][15][31] == 511


def test_bad_later_block_rejected_before_any_gate(keys):
    bits = encrypt_bits(keys.client, message_bits(b"x" * 60))
    good, second = split_blocks(bits)
    with GateEngine(keys.server) as engine:
        with pytest.raises(ShapeError, match=r"blocks\[1\]"):
            hash_blocks(engine, [good, second[:15]])
        assert engine.stats.total == 0
        assert engine.stats.batches == 0
