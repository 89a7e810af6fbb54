"""
drmreader entry point.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

from drmreader.core import DEFAULT_ENCODING, DEFAULT_NAME_WIDTH
from drmreader.exceptions import DrmError
from drmreader.extract import extract_links, extract_nodes, extract_places
from drmreader.save import (
    save_links,
    save_nodes,
    save_places,
    save_structures,
)

logger = logging.getLogger("drmreader")

LOG_FORMAT: str = "%(name)s - %(levelname)s - %(message)s"


def parse_arguments(argv: Sequence[str]) -> argparse.Namespace:
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="drmreader",
        description="Convert DRM nodes, links and place names into tables.",
    )
    parser.add_argument("input", help="input DRM file path")
    parser.add_argument(
        "--output-dir", default=".", help="directory for output files"
    )
    parser.add_argument("--nodes", help="node output file name")
    parser.add_argument("--links", help="link output file name")
    parser.add_argument("--places", help="place name output file name")
    parser.add_argument(
        "--format",
        choices=("csv", "json"),
        default="csv",
        help="output format: short CSV tables or full JSON records",
    )
    parser.add_argument(
        "--sort",
        action="store_true",
        help="sort records by identifiers before saving",
    )
    parser.add_argument(
        "--encoding", default=DEFAULT_ENCODING, help="DRM file encoding"
    )
    parser.add_argument(
        "--name-width",
        type=int,
        default=DEFAULT_NAME_WIDTH,
        help="bytes per place name character",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v", "--verbose", action="store_true", help="print every record"
    )
    verbosity.add_argument(
        "-q", "--quiet", action="store_true", help="print warnings only"
    )
    return parser.parse_args(argv)


def convert(
    name: str,
    records: list,
    path: Path,
    save: Callable[[list, Path], bool],
    sort: bool,
) -> None:
    """Echo records and save them."""
    logger.info("#%s: %d", name, len(records))
    for record in records:
        logger.debug("%s", record)
    save(sorted(records) if sort else records, path)


def run(argv: Optional[Sequence[str]] = None) -> int:
    """
    Command-line interface.

    Read nodes, links and place names from input DRM file and write each
    collection into its own output file.
    """
    arguments: argparse.Namespace = parse_arguments(
        sys.argv[1:] if argv is None else argv
    )

    level: int = logging.INFO
    if arguments.verbose:
        level = logging.DEBUG
    elif arguments.quiet:
        level = logging.WARNING
    logging.basicConfig(format=LOG_FORMAT)
    logger.setLevel(level)

    suffix: str = f".{arguments.format}"
    output_dir = Path(arguments.output_dir)

    def output_path(name: Optional[str], default: str) -> Path:
        return output_dir / (name or (default + suffix))

    def pick_saver(save: Callable[[list, Path], bool]) -> Callable:
        return save_structures if arguments.format == "json" else save

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        convert(
            "nodes",
            extract_nodes(arguments.input, arguments.encoding),
            output_path(arguments.nodes, "nodes"),
            pick_saver(save_nodes),
            arguments.sort,
        )
        convert(
            "links",
            extract_links(arguments.input, arguments.encoding),
            output_path(arguments.links, "links"),
            pick_saver(save_links),
            arguments.sort,
        )
        convert(
            "places",
            extract_places(
                arguments.input, arguments.encoding, arguments.name_width
            ),
            output_path(arguments.places, "places"),
            pick_saver(save_places),
            arguments.sort,
        )
    except (DrmError, OSError) as error:
        logger.error("Cannot convert %s: %s", arguments.input, error)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(run())
