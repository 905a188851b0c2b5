"""Backend over Zama's concrete-python.

Each gate is one function of a composable FHE module over 1-bit integers,
compiled once; every gate evaluation is a ``run`` of that function, so the
output of any gate can be fed into any other.
"""
from concrete import fhe

from .base import ClientKey, KeyPair, ServerKey

BIT_PAIRS = [(0, 0), (0, 1), (1, 0), (1, 1)]


@fhe.module()
class BooleanGates:
    @fhe.function({"x": "encrypted", "y": "encrypted"})
    def gate_and(x, y):
        return x & y

    @fhe.function({"x": "encrypted", "y": "encrypted"})
    def gate_or(x, y):
        return x | y

    @fhe.function({"x": "encrypted", "y": "encrypted"})
    def gate_xor(x, y):
        return x ^ y

    @fhe.function({"x": "encrypted"})
    def gate_not(x):
        return 1 - x

    composition = fhe.AllComposable()


def compile_gates(key_cache=None):
    if key_cache:
        configuration = fhe.Configuration(
            enable_unsafe_features=True,
            use_insecure_key_cache=True,
            insecure_key_cache_location=key_cache,
        )
    else:
        configuration = fhe.Configuration()
    return BooleanGates.compile(
        {
            "gate_and": BIT_PAIRS,
            "gate_or": BIT_PAIRS,
            "gate_xor": BIT_PAIRS,
            "gate_not": [0, 1],
        },
        configuration=configuration,
    )


class ConcreteServerKey(ServerKey):
    name = "concrete"

    def __init__(self, module):
        self.module = module

    def and_(self, a, b):
        return self.module.gate_and.run(a, b)

    def or_(self, a, b):
        return self.module.gate_or.run(a, b)

    def xor(self, a, b):
        return self.module.gate_xor.run(a, b)

    def not_(self, a):
        return self.module.gate_not.run(a)


class ConcreteClientKey(ClientKey):
    name = "concrete"

    def __init__(self, module):
        self.module = module

    def encrypt(self, bit):
        return self.module.gate_not.encrypt(int(bool(bit)))

    def decrypt_ciphertext(self, ciphertext):
        return self.module.gate_not.decrypt(ciphertext)


def generate_keys(config=None) -> KeyPair:
    # Compilation should take a few seconds; keys are generated on first encrypt
    module = compile_gates(config.key_cache if config is not None else None)
    return KeyPair(ConcreteClientKey(module), ConcreteServerKey(module))
