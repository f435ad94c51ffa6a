import argparse
import logging
import time

from substitution_errors import SubstitutionMatrixError
from substitution_matrix import SubstitutionMatrix
from substitution_frequencies import tally_substitutions

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def read_observations(observations_path: str):
    """
    Read substitution observations, one "REF SUB" pair per line.
    Blank lines and lines starting with # are skipped.
    Yields: (reference_base, base) byte values
    """
    with open(observations_path, "r", encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            parts = line.split()
            if len(parts) != 2 or len(parts[0]) != 1 or len(parts[1]) != 1:
                raise SubstitutionMatrixError(
                    f"Malformed observation on line {line_number}: {line!r}"
                )
            yield ord(parts[0]), ord(parts[1])


def format_matrix(matrix: SubstitutionMatrix) -> str:
    rows = str(matrix).split("\t")
    return "\n".join([f"encoded: {matrix.encoded_bytes().hex()}"] + rows)


def encode_command(args) -> str:
    frequencies = tally_substitutions(read_observations(args.observations))
    logger.info(f"Read {int(frequencies.sum()):,} substitution observations from {args.observations}")
    return format_matrix(SubstitutionMatrix.from_frequencies(frequencies))


def decode_command(args) -> str:
    try:
        encoded = bytes.fromhex(args.encoded)
    except ValueError as e:
        raise SubstitutionMatrixError(f"Encoded matrix is not valid hex: {args.encoded!r}") from e
    return format_matrix(SubstitutionMatrix.from_bytes(encoded))


def build_parser():
    parser = argparse.ArgumentParser(
        prog="substitution-matrix",
        description="Build and inspect base substitution matrices.",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    logging_group = parser.add_argument_group("LOGGING")
    logging_group.add_argument(
        "--verbose",
        type=int,
        metavar="INT",
        default=0,
        choices=[0, 1],
        help="Enable verbose logging (0/1) [0]",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    encode_parser = subparsers.add_parser(
        "encode", help="Build a matrix from a file of substitution observations"
    )
    encode_parser.add_argument(
        "observations", metavar="FILE", help="Observations file, one 'REF SUB' pair per line"
    )
    encode_parser.set_defaults(func=encode_command)

    decode_parser = subparsers.add_parser(
        "decode", help="Expand a serialized matrix given as 10 hex digits"
    )
    decode_parser.add_argument("encoded", metavar="HEX", help="Encoded matrix, e.g. 1b1b1b1b1b")
    decode_parser.set_defaults(func=decode_command)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.verbose == 1:
        logging.getLogger().setLevel(logging.DEBUG)
    else:
        logging.getLogger().setLevel(logging.INFO)

    start_time = time.perf_counter()
    try:
        output = args.func(args)
    except SubstitutionMatrixError as e:
        logger.warning(f"ERROR: {e}")
        raise

    print(output)
    end_time = time.perf_counter()
    logger.debug(f"Completed in {end_time - start_time:.4f} seconds")
    return 0


if __name__ == "__main__":
    main()
