"""Backend over Google's jaxite boolean CGGI scheme."""
import secrets

from jaxite.jaxite_bool import bool_params
from jaxite.jaxite_bool import jaxite_bool

from .base import ClientKey, KeyPair, ServerKey


class JaxiteServerKey(ServerKey):
    name = "jaxite"

    def __init__(self, server_key_set, params):
        self.server_key_set = server_key_set
        self.params = params

    def and_(self, a, b):
        return jaxite_bool.and_(a, b, self.server_key_set, self.params)

    def or_(self, a, b):
        return jaxite_bool.or_(a, b, self.server_key_set, self.params)

    def xor(self, a, b):
        return jaxite_bool.xor_(a, b, self.server_key_set, self.params)

    def not_(self, a):
        # No bootstrap needed, so no server key set either
        return jaxite_bool.not_(a, self.params)


class JaxiteClientKey(ClientKey):
    name = "jaxite"

    def __init__(self, client_key_set, lwe_rng):
        self.client_key_set = client_key_set
        self.lwe_rng = lwe_rng

    def encrypt(self, bit):
        return jaxite_bool.encrypt(bool(bit), self.client_key_set, self.lwe_rng)

    def decrypt_ciphertext(self, ciphertext):
        return jaxite_bool.decrypt(ciphertext, self.client_key_set)


def generate_keys(config=None) -> KeyPair:
    seed = config.seed if config is not None and config.seed is not None else secrets.randbits(31)
    params = bool_params.get_params_for_128_bit_security()
    lwe_rng = bool_params.get_lwe_rng_for_128_bit_security(seed)
    rlwe_rng = bool_params.get_rlwe_rng_for_128_bit_security(seed)
    cks = jaxite_bool.ClientKeySet(params, lwe_rng, rlwe_rng)
    sks = jaxite_bool.ServerKeySet(cks, params, lwe_rng, rlwe_rng)
    return KeyPair(JaxiteClientKey(cks, lwe_rng), JaxiteServerKey(sks, params))
