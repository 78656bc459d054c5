import argparse
import json
import logging
import sys

from basen import MAX_BASE, MIN_BASE
from errors import ReconstructionError
from params import DEFAULT_INPUT, ReconstructionParams
from shamir import DEFAULT_COEFF_BITS, generate_shares
from shares import dump_document, load_document, recover_document, write_document

logger = logging.getLogger("reconstruct")


def build_parser():
    parser = argparse.ArgumentParser(
        description="Recover a Shamir secret from base-N encoded shares using exact arithmetic")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Log progress to stderr (repeat for debug output)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    sub = parser.add_subparsers(dest="command", required=True)

    recover = sub.add_parser("recover", help="Print the secret held by share documents")
    recover.add_argument("inputs", nargs="*", default=[DEFAULT_INPUT],
                         help=f"Share documents in JSON (default: {DEFAULT_INPUT})")
    recover.add_argument("-k", "--threshold", type=int, default=None,
                         help="Use this many shares instead of the document's keys.k")

    split = sub.add_parser("split", help="Split a secret into a share document")
    split.add_argument("secret", type=int, help="Non-negative integer to share")
    split.add_argument("-n", "--num-shares", type=int, default=5,
                       help="Number of shares to generate (default: 5)")
    split.add_argument("-k", "--threshold", type=int, default=3,
                       help="Shares needed for reconstruction (default: 3)")
    split.add_argument("-b", "--base", type=int, nargs="+", default=[10],
                       help="Base(s) for the share values, cycled over the shares (default: 10)")
    split.add_argument("--coeff-bits", type=int, default=DEFAULT_COEFF_BITS,
                       help=f"Bit size of the random coefficients (default: {DEFAULT_COEFF_BITS})")
    split.add_argument("-o", "--output", default=None,
                       help="Write the document here instead of stdout")
    return parser


def configure_logging(level):
    logging.basicConfig(level=level, stream=sys.stderr,
                        format="%(levelname)s %(name)s: %(message)s")


def run_recover(params: ReconstructionParams) -> int:
    status = 0
    for path in params.inputs:
        try:
            doc = load_document(path)
            secret = recover_document(doc, params.threshold)
        except (ReconstructionError, OSError) as exc:
            logger.debug("Reconstruction of %s failed", path, exc_info=True)
            print(f"error: {path}: {exc}", file=sys.stderr)
            status = 1
            continue
        logger.debug("Secret for %s: %d", path, secret)
        if len(params.inputs) == 1:
            print(secret)
        else:
            print(f"{path}: {secret}")
    return status


def run_split(args) -> int:
    points = generate_shares(args.secret, args.threshold, args.num_shares, args.coeff_bits)
    bases = [args.base[i % len(args.base)] for i in range(len(points))]
    data = dump_document(points, args.threshold, bases)
    logger.info("Generated %d shares with threshold %d", len(points), args.threshold)

    if args.output is None:
        print(json.dumps(data, indent=2))
    else:
        try:
            write_document(args.output, data)
        except OSError as exc:
            print(f"error: {args.output}: {exc}", file=sys.stderr)
            return 1
    return 0


def main(argv=None):
    # secrets are printed in decimal whatever their size
    if hasattr(sys, "set_int_max_str_digits"):
        sys.set_int_max_str_digits(0)

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "split":
        if args.secret < 0:
            parser.error("Secret must be non-negative.")
        if args.threshold < 1:
            parser.error("Threshold must be at least 1.")
        if args.threshold > args.num_shares:
            parser.error("Threshold cannot be greater than the number of shares.")
        if args.coeff_bits < 1:
            parser.error("Coefficient size must be at least 1 bit.")
        for base in args.base:
            if not MIN_BASE <= base <= MAX_BASE:
                parser.error(f"Base must be between {MIN_BASE} and {MAX_BASE}, got {base}.")

    params = ReconstructionParams.from_args(args)
    if params.threshold is not None and params.threshold < 1:
        parser.error("Threshold must be at least 1.")
    configure_logging(params.log_level)

    if args.command == "split":
        return run_split(args)
    return run_recover(params)


if __name__ == "__main__":
    sys.exit(main())
