"""Client side of the protocol: padding, encryption, decryption, hex digest.

Only these functions touch the client key. The compute side receives the
encrypted bits and the server key, nothing else.
"""
import numpy as np

from .backends import generate_keys
from .config import EngineConfig
from .driver import sha256_fhe
from .gates import GateEngine


def pad_message(message):
    """Standard SHA-256 padding: 0x80, zero bytes, 64-bit big-endian bit length."""
    if isinstance(message, str):
        message = message.encode("utf-8")
    message = bytes(message)
    # Find k, solution to len + 1 + k = 56 mod 64 (in bytes)
    zeros = (55 - len(message)) % 64
    return message + b"\x80" + b"\x00" * zeros + (len(message) * 8).to_bytes(8, "big")


def message_bits(message):
    """Padded message as a list of bools, most significant bit of each byte first."""
    padded = np.frombuffer(pad_message(message), dtype=np.uint8)
    return [bool(bit) for bit in np.unpackbits(padded)]


def encrypt_bits(client_key, bits):
    return [client_key.encrypt(bit) for bit in bits]


def decrypt_bits(client_key, ciphertexts):
    return [client_key.decrypt(ct) for ct in ciphertexts]


def bits_to_hex(bits):
    if len(bits) % 8:
        raise ValueError(f"bit count must be a multiple of 8, got {len(bits)}")
    return np.packbits(np.array([bool(b) for b in bits], dtype=np.uint8)).tobytes().hex()


def hash_message(message, keys=None, config=None):
    """Pad, encrypt, hash homomorphically, decrypt. Returns the hex digest."""
    config = (config or EngineConfig()).validate()
    keys = keys or generate_keys(config)
    encrypted = encrypt_bits(keys.client, message_bits(message))
    with GateEngine.from_config(keys.server, config) as engine:
        digest = sha256_fhe(engine, encrypted)
    return bits_to_hex(decrypt_bits(keys.client, digest))
