"""
Record collection serialization.

Collections are written as comma-separated text, one header row and one row
per record, in collection order. Fields are not quoted: a place name with a
comma in it breaks its row.
"""
import json
import logging
from pathlib import Path
from typing import Iterable, Sequence, Union

from drmreader.core import Link, Node, Place

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
Record = Union[Node, Link, Place]

DELIMITER: str = ","
OUTPUT_ENCODING: str = "utf-8"

NODE_COLUMNS: list[str] = ["id", "x", "y"]
LINK_COLUMNS: list[str] = ["node1_id", "node2_id", "length", "coordinates"]
PLACE_COLUMNS: list[str] = ["name", "x", "y"]


def write_rows(
    path: PathLike, columns: list[str], rows: Iterable[list[object]]
) -> None:
    with Path(path).open(
        "w", encoding=OUTPUT_ENCODING, newline="\n"
    ) as output_file:
        output_file.write(DELIMITER.join(columns) + "\n")
        for row in rows:
            output_file.write(DELIMITER.join(map(str, row)) + "\n")


def save_nodes(nodes: Sequence[Node], path: PathLike) -> bool:
    """Save node identifiers and coordinates."""
    write_rows(
        path,
        NODE_COLUMNS,
        ([node.id, node.coordinate.x, node.coordinate.y] for node in nodes),
    )
    logger.info("Saved %d nodes to %s", len(nodes), path)
    return True


def save_links(links: Sequence[Link], path: PathLike) -> bool:
    """
    Save link endpoints, lengths and interpolation points.

    Coordinates are flattened into x, y columns, so row width depends on the
    number of interpolation points.
    """
    write_rows(
        path,
        LINK_COLUMNS,
        (
            [link.node1_id, link.node2_id, link.length]
            + [
                value
                for coordinate in link.coordinates
                for value in (coordinate.x, coordinate.y)
            ]
            for link in links
        ),
    )
    logger.info("Saved %d links to %s", len(links), path)
    return True


def save_places(places: Sequence[Place], path: PathLike) -> bool:
    """Save place names and coordinates."""
    write_rows(
        path,
        PLACE_COLUMNS,
        (
            [place.name, place.coordinate.x, place.coordinate.y]
            for place in places
        ),
    )
    logger.info("Saved %d places to %s", len(places), path)
    return True


def save_structures(records: Sequence[Record], path: PathLike) -> bool:
    """Save full records as a JSON list."""
    with Path(path).open(
        "w", encoding=OUTPUT_ENCODING, newline="\n"
    ) as output_file:
        json.dump(
            [record.to_structure() for record in records],
            output_file,
            ensure_ascii=False,
        )
    logger.info("Saved %d records to %s", len(records), path)
    return True
