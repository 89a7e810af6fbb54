"""
Record extraction from DRM files.

Each extraction is an independent pass over the whole file: lines are
classified by their tag and only the lines of one record kind are decoded.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional, Union

from drmreader.core import (
    DEFAULT_ENCODING,
    DEFAULT_NAME_WIDTH,
    Link,
    Node,
    Place,
    RecordType,
    coordinate_slice,
    pair_key,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def iter_lines(path: PathLike, record_type: RecordType) -> Iterator[bytes]:
    """
    Iterate over the lines of one record kind in file order.

    Lines with other tags, blank and short lines are skipped.

    :param path: DRM file path
    :param record_type: record kind to keep
    """
    with Path(path).open("rb") as input_file:
        for line in input_file:
            line = line.rstrip(b"\r\n")
            if RecordType.of(line) == record_type:
                yield line


def extract_nodes(
    path: PathLike, encoding: str = DEFAULT_ENCODING
) -> list[Node]:
    """Read all basic map nodes from a DRM file."""
    nodes: list[Node] = [
        Node.from_line(line, encoding)
        for line in iter_lines(path, RecordType.NODE)
    ]
    logger.info("Extracted %d nodes from %s", len(nodes), path)
    return nodes


def extract_places(
    path: PathLike,
    encoding: str = DEFAULT_ENCODING,
    name_width: int = DEFAULT_NAME_WIDTH,
) -> list[Place]:
    """Read all place names from a DRM file."""
    places: list[Place] = [
        Place.from_line(line, encoding, name_width)
        for line in iter_lines(path, RecordType.PLACE)
    ]
    logger.info("Extracted %d places from %s", len(places), path)
    return places


@dataclass
class LinkAccumulator:
    """
    Group the physical lines of links into logical links.

    A link whose interpolation points do not fit into one line is continued
    on the following lines, which repeat its node pair key. The first line of
    a link holds its header fields and declared coordinate count; coordinate
    text of every line is buffered until the next link starts or the input
    ends.

    Continuation lines must directly follow the first line of their link: a
    key that reappears after another link is taken as a continuation of the
    link being accumulated.
    """

    encoding: str = DEFAULT_ENCODING

    # Node pair keys of all links started so far.
    seen: set[bytes] = field(default_factory=set)

    # First line of the link being accumulated, None when idle.
    header: Optional[bytes] = None

    buffer: bytearray = field(default_factory=bytearray)

    @property
    def accumulating(self) -> bool:
        return self.header is not None

    def feed(self, line: bytes) -> Optional[Link]:
        """
        Consume one link line.

        :return: the previous link if this line starts a new one
        """
        key: bytes = pair_key(line)

        if key in self.seen:
            logger.debug("Continuation line for node pair %r", key)
            if not self.accumulating:
                self.header = line
            self.buffer += coordinate_slice(line)
            return None

        link: Optional[Link] = self.flush()
        self.seen.add(key)
        self.header = line
        self.buffer = bytearray(coordinate_slice(line))
        return link

    def flush(self) -> Optional[Link]:
        """
        Finish the link being accumulated.

        :return: the link, or None when idle
        """
        if not self.accumulating:
            return None
        link: Link = Link.from_header(
            self.header, bytes(self.buffer), self.encoding
        )
        logger.debug("Link %d-%d complete", link.node1_id, link.node2_id)
        self.header = None
        self.buffer = bytearray()
        return link


def extract_links(
    path: PathLike, encoding: str = DEFAULT_ENCODING
) -> list[Link]:
    """Read all basic map links from a DRM file."""
    links: list[Link] = []
    accumulator = LinkAccumulator(encoding)

    for line in iter_lines(path, RecordType.LINK):
        link: Optional[Link] = accumulator.feed(line)
        if link is not None:
            links.append(link)

    link = accumulator.flush()
    if link is not None:
        links.append(link)

    logger.info("Extracted %d links from %s", len(links), path)
    return links
