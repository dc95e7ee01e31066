"""
secretvote recovers a secret from Shamir shares, some of which may be wrong.

Every subset of k shares votes for the value of the polynomial at 0 and the
most voted value wins. Shares that do not lie on the elected polynomial are
reported as wrong.
"""
import logging
import sys
from argparse import ArgumentParser
from pathlib import Path
from typing import List, Optional

from secretvote import logger as log_setup
from secretvote.config import ReconstructionCfg
from secretvote.consensus import reconstruct
from secretvote.dataset import Dataset
from secretvote.errors import ReconstructionError
from secretvote.report import FORMATS, render

logger = logging.getLogger(__name__)


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog="secretvote", description=__doc__)
    parser.add_argument("files", nargs="+", type=Path, help="Share documents (json).")
    parser.add_argument(
        "--format", choices=FORMATS, default="plain", help="Output format."
    )
    parser.add_argument(
        "--config", type=Path, help="Json file holding a reconstruction config."
    )
    parser.add_argument(
        "--workers", type=int, help="Processes used to tally the subsets."
    )
    parser.add_argument(
        "--chunk-size", type=int, help="Subsets handed to a worker at once."
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Verbosity of the logs written to stderr.",
    )
    return parser


def load_cfg(
    path: Optional[Path], workers: Optional[int], chunk_size: Optional[int]
) -> ReconstructionCfg:
    cfg = ReconstructionCfg.load(path) if path else ReconstructionCfg()
    return ReconstructionCfg(
        workers=cfg.workers if workers is None else workers,
        chunk_size=cfg.chunk_size if chunk_size is None else chunk_size,
    )


def run(location: Path, cfg: ReconstructionCfg, fmt: str) -> str:
    dataset = Dataset.load(location)
    return render(reconstruct(dataset.points(), dataset.k, cfg), fmt)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    log_setup.configure(args.log_level)
    try:
        cfg = load_cfg(args.config, args.workers, args.chunk_size)
    except (AssertionError, OSError, ValueError) as err:
        logger.error("Invalid configuration: %s", err)
        return 2

    status = 0
    for location in args.files:
        if len(args.files) > 1:
            print(f"== {location}")
        try:
            print(run(location, cfg, args.format))
        except ReconstructionError as err:
            logger.error("%s: %s", err.kind.value, err)
            status = 1
        except OSError as err:
            logger.error("Could not read %s: %s", location, err)
            status = 1
    return status


if __name__ == "__main__":
    sys.exit(main())
