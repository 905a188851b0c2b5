"""Command line entry point: python -m fhe_sha256 "hello world" """
import argparse
import hashlib
import logging
import sys

from .client import hash_message
from .config import BACKENDS, CARRY_STRATEGIES, EngineConfig
from .errors import FheShaError

logger = logging.getLogger("fhe_sha256")


def main(argv=None):
    parser = argparse.ArgumentParser(prog="fhe_sha256", description="SHA-256 evaluated over encrypted bits")
    parser.add_argument("message", nargs="?", default="hello world", help="Message to hash (default: %(default)r)")
    parser.add_argument("--backend", "-b", choices=BACKENDS, default=None, help="FHE backend")
    parser.add_argument("--workers", "-w", type=int, default=None, help="Lane chunks per gate batch")
    parser.add_argument("--carry", choices=CARRY_STRATEGIES, default=None, help="Adder carry network")
    parser.add_argument("--seed", type=int, default=None, help="Key generation seed (jaxite)")
    parser.add_argument("--key-cache", default=None, help="Insecure key cache directory (concrete)")
    parser.add_argument("--check", action="store_true", help="Compare against hashlib and fail on mismatch")
    parser.add_argument("--verbose", "-v", action="count", default=0, help="-v for info, -vv for debug")
    args = parser.parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        config = EngineConfig.from_env().with_overrides(
            backend=args.backend, workers=args.workers, carry=args.carry,
            seed=args.seed, key_cache=args.key_cache,
        )
        digest = hash_message(args.message, config=config)
    except FheShaError as exc:
        logger.error("%s", exc)
        return 1

    print(digest)
    if args.check:
        expected = hashlib.sha256(args.message.encode("utf-8")).hexdigest()
        if digest != expected:
            logger.error("digest mismatch, expected %s", expected)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
