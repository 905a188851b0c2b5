"""Capability interface every boolean FHE backend implements.

A backend splits into a ``ClientKey`` that can encrypt and decrypt single
bits and a ``ServerKey`` that can only evaluate gates. The compute side only
ever receives the ``ServerKey``.
"""
import abc
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TrivialBit:
    """A publicly known bit: no noise, no key material, no gate cost."""

    value: bool

    def __bool__(self):
        return self.value


TRIVIAL_FALSE = TrivialBit(False)
TRIVIAL_TRUE = TrivialBit(True)


def trivial_bit(value) -> TrivialBit:
    return TRIVIAL_TRUE if value else TRIVIAL_FALSE


class ServerKey(abc.ABC):
    """Read-only evaluation capability, shared by every gate lane."""

    name = "abstract"

    @abc.abstractmethod
    def and_(self, a: Any, b: Any) -> Any:
        ...

    @abc.abstractmethod
    def or_(self, a: Any, b: Any) -> Any:
        ...

    @abc.abstractmethod
    def xor(self, a: Any, b: Any) -> Any:
        ...

    @abc.abstractmethod
    def not_(self, a: Any) -> Any:
        ...


class ClientKey(abc.ABC):
    """Secret key held by the client."""

    name = "abstract"

    @abc.abstractmethod
    def encrypt(self, bit: bool) -> Any:
        ...

    @abc.abstractmethod
    def decrypt_ciphertext(self, ciphertext: Any) -> bool:
        ...

    def decrypt(self, ciphertext) -> bool:
        if isinstance(ciphertext, TrivialBit):
            return ciphertext.value
        return bool(self.decrypt_ciphertext(ciphertext))


@dataclass(frozen=True)
class KeyPair:
    client: ClientKey
    server: ServerKey
