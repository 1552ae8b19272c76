"""
Interactive demo of the message passing decoder.

Reads the code structure once, then decodes received LLR vectors until the
operator stops:

    python mp_dec.py [--module mp_sparse|mp_numba] [--verbose]
"""

import argparse
import importlib
import logging
import sys

logger = logging.getLogger(__name__)

BANNER = """\
----Message Passing Decoding Algorithm----
Received LLR values: rxLLR[i] = ln(p(rx[i]|0) / p(rx[i]|1))
Example:
Channel code: (3, 1) binary repetition code
Number of bits: nBit = 3
Number of checks: nCheck = 2
Number of edges: nEdge = 4
Linear indices of edges: idxLinear = 0 1 2 5
Modulation: BPSK (0 -> +1, 1 -> -1)
PSD of AWGN: N0 = 1
Received waveform: rx = 1 1 -1
Received LLR values: rxLLR = 4 / N0 * rx = 4 4 -4
Maximum number of iterations: nIterationMax = 10
Estimated codeword: cHat = 0 0 0
Number of iterations executed: nIteration = 1
"""

MODULES = ("mp_sparse", "mp_numba")


def read_numbers(prompt, count, cast):
    """Read count whitespace separated values, continuing on new lines if needed."""
    values = []
    line = input(prompt)
    while True:
        values.extend(cast(token) for token in line.split())
        if len(values) >= count:
            return values[:count]
        line = input()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument(
        "--module",
        choices=MODULES,
        default="mp_sparse",
        help="decoder implementation to use",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def run(decoder_cls):
    n_bit = read_numbers("nBit = ", 1, int)[0]
    n_check = read_numbers("nCheck = ", 1, int)[0]
    n_edge = read_numbers("nEdge = ", 1, int)[0]
    idx_linear = read_numbers("idxLinear = ", n_edge, float) if n_edge > 0 else []

    decoder = decoder_cls(n_bit, n_check, n_edge, idx_linear)
    logger.info("Decoder ready: %r", decoder.graph)

    while True:
        rx_llr = read_numbers("rxLLR = ", n_bit, float)
        max_iter = read_numbers("nIterationMax = ", 1, int)[0]

        c_hat, n_iteration = decoder.decode(rx_llr, max_iter)

        print("cHat = " + " ".join(str(b) for b in c_hat))
        print(f"nIteration = {n_iteration}\n")

        if input("Press ENTER to continue, or enter any other key to exit: "):
            break


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    decoder_cls = importlib.import_module(args.module).MPDecoder

    print(BANNER)
    try:
        run(decoder_cls)
    except EOFError:
        print()
    except ValueError as e:
        logger.error("Invalid input: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
