"""Insecure plaintext backend.

Ciphertexts carry the bit in the clear. Only meant for tests and dry runs of
the circuit: it checks the wiring and gate counts, not the cryptography.
"""
import secrets
import uuid
from dataclasses import dataclass

from ..errors import ConfigurationError
from .base import ClientKey, KeyPair, ServerKey


@dataclass(frozen=True)
class ClearCiphertext:
    value: bool
    key_id: str
    # Stands in for encryption randomness; never affects the value
    nonce: int = 0


class ClearServerKey(ServerKey):
    name = "clear"

    def __init__(self, key_id):
        self.key_id = key_id

    def _check(self, ct):
        if not isinstance(ct, ClearCiphertext) or ct.key_id != self.key_id:
            raise ConfigurationError("ciphertext was not produced under this evaluation key")
        return ct.value

    def _wrap(self, value):
        return ClearCiphertext(bool(value), self.key_id, secrets.randbits(32))

    def and_(self, a, b):
        return self._wrap(self._check(a) and self._check(b))

    def or_(self, a, b):
        return self._wrap(self._check(a) or self._check(b))

    def xor(self, a, b):
        return self._wrap(self._check(a) != self._check(b))

    def not_(self, a):
        return self._wrap(not self._check(a))


class ClearClientKey(ClientKey):
    name = "clear"

    def __init__(self, key_id):
        self.key_id = key_id

    def encrypt(self, bit):
        return ClearCiphertext(bool(bit), self.key_id, secrets.randbits(32))

    def decrypt_ciphertext(self, ciphertext):
        if not isinstance(ciphertext, ClearCiphertext) or ciphertext.key_id != self.key_id:
            raise ConfigurationError("ciphertext was not produced under this client key")
        return ciphertext.value


def generate_keys(config=None) -> KeyPair:
    key_id = uuid.uuid4().hex
    return KeyPair(ClearClientKey(key_id), ClearServerKey(key_id))
