import hashlib

import pytest

from fhe_sha256.backends import TrivialBit
from fhe_sha256.client import bits_to_hex, decrypt_bits, encrypt_bits, message_bits, pad_message


@pytest.mark.parametrize("length, padded", [(0, 64), (3, 64), (55, 64), (56, 128), (63, 128), (64, 128), (119, 128)])
def test_pad_message_length(length, padded):
    assert len(pad_message(b"x" * length)) == padded


def test_pad_message_layout():
    padded = pad_message("abc")
    assert padded[:4] == b"abc\x80"
    assert padded[4:56] == b"\x00" * 52
    assert padded[56:] == (24).to_bytes(8, "big")


def test_message_bits_msb_first():
    bits = message_bits(b"\x01")
    assert bits[:8] == [False] * 7 + [True]
    assert bits[8] is True
    assert len(bits) == 512


def test_bits_to_hex():
    digest = hashlib.sha256(b"").digest()
    bits = [bool(byte >> (7 - i) & 1) for byte in digest for i in range(8)]
    assert bits_to_hex(bits) == digest.hex()
    with pytest.raises(ValueError):
        bits_to_hex([True] * 7)


def test_encrypt_decrypt_bits(keys):
    bits = [True, False, False, True]
    encrypted = encrypt_bits(keys.client, bits)
    assert decrypt_bits(keys.client, encrypted) == bits
    assert decrypt_bits(keys.client, [TrivialBit(True)]) == [True]


def test_fresh_encryptions_differ(keys):
    first = encrypt_bits(keys.client, [True] * 64)
    second = encrypt_bits(keys.client, [True] * 64)
    assert first != second
