import random

import pytest

from fhe_sha256.backends import generate_keys
from fhe_sha256.config import EngineConfig
from fhe_sha256.gates import GateEngine
from fhe_sha256.words import bits_to_int, int_to_bits


@pytest.fixture
def keys():
    return generate_keys(EngineConfig(backend="clear"))


@pytest.fixture(params=["ripple", "prefix"])
def carry(request):
    return request.param


@pytest.fixture
def engine(keys):
    with GateEngine(keys.server, workers=8) as engine:
        yield engine


@pytest.fixture
def rng():
    return random.Random(1234)


def encrypt_word(keys, value):
    return [keys.client.encrypt(bit) for bit in int_to_bits(value)]


def decrypt_word(keys, word):
    return bits_to_int([keys.client.decrypt(bit) for bit in word])
