"""SHA-256 evaluated homomorphically over encrypted bits."""
from .adder import add, add_many
from .backends import KeyPair, TrivialBit, generate_keys
from .client import bits_to_hex, decrypt_bits, encrypt_bits, hash_message, message_bits, pad_message
from .compressor import compress, expand_schedule
from .config import EngineConfig
from .driver import hash_blocks, sha256_fhe, split_blocks
from .errors import ConfigurationError, FheShaError, GateBatchError, ShapeError
from .gates import GateEngine, GateStats
from .words import big_sigma0, big_sigma1, ch, maj, rotate_right, shift_right, sigma0, sigma1

__version__ = "0.1.0"
