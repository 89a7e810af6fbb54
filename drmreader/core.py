"""
DRM (Digital RoadMap database) record decoding.

Every DRM line is a fixed-width record: the first two characters are the
record tag and all other fields live at fixed byte offsets, described here by
field layout tables.
"""
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from drmreader.exceptions import (
    CoordinateLengthError,
    FieldValueError,
    RecordTagError,
)

logger = logging.getLogger(__name__)

Line = Union[bytes, str]
Structure = dict[str, Any]

DEFAULT_ENCODING: str = "utf-8"

# Bytes per name character, full-width characters take 3 bytes in UTF-8.
DEFAULT_NAME_WIDTH: int = 3

TAG_LENGTH: int = 2
COORDINATE_WIDTH: int = 10
COORDINATE_FIELD_WIDTH: int = 5

# Node pair key of a link line: node1_id and node2_id as raw text.
PAIR_KEY_OFFSET: int = 2
PAIR_KEY_LENGTH: int = 8

# Interpolation points of a link line, 16 coordinates at most.
COORDINATES_OFFSET: int = 91
COORDINATES_LENGTH: int = 160

PLACE_NAME_OFFSET: int = 35

INTEGER_PATTERN = re.compile(rb" *[+-]?[0-9]+ *")


class RecordType(Enum):
    """Record kind, valued by its line tag."""

    # Basic map node.
    NODE = "21"

    # Basic map link, possibly continued on following lines.
    LINK = "22"

    # Place name.
    PLACE = "46"

    @property
    def tag(self) -> bytes:
        return self.value.encode("ascii")

    def matches(self, line: bytes) -> bool:
        """Check whether the line carries this record tag."""
        return line[:TAG_LENGTH] == self.tag

    @classmethod
    def of(cls, line: bytes) -> Optional["RecordType"]:
        """
        Classify a line by its tag.

        :return: record type or None for short lines and unknown tags
        """
        for record_type in cls:
            if record_type.matches(line):
                return record_type
        return None

    def __str__(self):
        return self.name.lower()


class FieldType(Enum):
    """How the bytes of a field are decoded."""

    INTEGER = "integer"
    TEXT = "text"


def parse_integer(raw: bytes, name: str) -> int:
    """Parse a signed decimal field, padded with zeros or spaces."""
    if not INTEGER_PATTERN.fullmatch(raw):
        raise FieldValueError(f"field {name!r}: {raw!r} is not an integer")
    return int(raw)


@dataclass(frozen=True)
class Field:
    """Fixed-position field of a record line."""

    name: str
    offset: int
    length: int
    type_: FieldType = FieldType.INTEGER

    def decode(
        self, line: bytes, encoding: str = DEFAULT_ENCODING
    ) -> Union[int, str]:
        """Decode the field from a record line."""
        if self.length < 0:
            raise FieldValueError(
                f"field {self.name!r}: negative length {self.length}"
            )
        raw: bytes = line[self.offset : self.offset + self.length]
        if len(raw) < self.length:
            raise FieldValueError(
                f"field {self.name!r}: line too short, expected "
                f"{self.length} bytes at offset {self.offset}, got {len(raw)}"
            )
        if self.type_ == FieldType.INTEGER:
            return parse_integer(raw, self.name)
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError as error:
            raise FieldValueError(
                f"field {self.name!r}: cannot decode {raw!r} as {encoding}"
            ) from error


Layout = tuple[Field, ...]

NODE_LAYOUT: Layout = (
    Field("id", 2, 4),
    Field("x", 8, 5),
    Field("y", 13, 5),
    Field("elevation", 18, 3),
    Field("type", 21, 1),
)

LINK_LAYOUT: Layout = (
    Field("node1_id", 2, 4),
    Field("node2_id", 6, 4),
    Field("internal_record_id", 10, 2),
    Field("road_type", 13, 1),
    Field("length", 44, 5),
    Field("link_type", 49, 1),
    Field("coordinate_count", 88, 3),
)

PLACE_LAYOUT: Layout = (
    Field("id", 3, 4),
    Field("type", 11, 2),
    Field("x", 23, 5),
    Field("y", 28, 5),
    Field("name_length", 33, 2),
)


def decode_fields(
    line: bytes, layout: Layout, encoding: str = DEFAULT_ENCODING
) -> dict[str, Union[int, str]]:
    """Decode every field of the layout from the line."""
    return {field.name: field.decode(line, encoding) for field in layout}


def to_bytes(line: Line, encoding: str = DEFAULT_ENCODING) -> bytes:
    """Encode text lines, bytes lines are returned as they are."""
    if isinstance(line, str):
        return line.encode(encoding)
    return line


def check_tag(line: bytes, record_type: RecordType) -> None:
    """Reject a line of another record kind."""
    if not record_type.matches(line):
        raise RecordTagError(
            f"the line is not a {record_type} record: tag "
            f"{line[:TAG_LENGTH]!r}, expected {record_type.tag!r}"
        )


def pair_key(line: bytes) -> bytes:
    """Node pair key of a link line, used only to group continuation lines."""
    return line[PAIR_KEY_OFFSET : PAIR_KEY_OFFSET + PAIR_KEY_LENGTH]


def coordinate_slice(line: bytes) -> bytes:
    """Raw interpolation point text of a link line."""
    return line[COORDINATES_OFFSET : COORDINATES_OFFSET + COORDINATES_LENGTH]


@dataclass(frozen=True)
class Coordinate:
    """Normalized map coordinate."""

    x: int
    y: int

    @classmethod
    def from_text(cls, text: Line) -> "Coordinate":
        """
        Decode 10-character coordinate text: x and y, 5 characters each.

        :param text: coordinate text, e.g. "0123401234" or "-0012 0345"
        """
        if len(text) != COORDINATE_WIDTH:
            raise CoordinateLengthError(
                f"invalid length: coordinate text must be {COORDINATE_WIDTH} "
                f"characters, got {len(text)} in {text!r}"
            )
        raw: bytes = (
            text.encode("ascii", "replace") if isinstance(text, str) else text
        )
        return cls(
            parse_integer(raw[:COORDINATE_FIELD_WIDTH], "x"),
            parse_integer(raw[COORDINATE_FIELD_WIDTH:], "y"),
        )

    def to_text(self) -> str:
        """Encode into 10-character coordinate text."""
        text: str = f"{self.x:05d}{self.y:05d}"
        if len(text) != COORDINATE_WIDTH:
            raise FieldValueError(
                f"coordinate {self} does not fit into {COORDINATE_WIDTH} "
                f"characters"
            )
        return text

    @classmethod
    def from_structure(cls, structure: list[int]) -> "Coordinate":
        x, y = structure
        return cls(x, y)

    def to_structure(self) -> list[int]:
        return [self.x, self.y]

    def __str__(self):
        return f"({self.x}, {self.y})"


@dataclass(frozen=True)
class Node:
    """Basic map node: intersection or other road network point."""

    id: int
    type_: int
    coordinate: Coordinate
    elevation: int

    @classmethod
    def from_line(
        cls, line: Line, encoding: str = DEFAULT_ENCODING
    ) -> "Node":
        """Decode a node record line."""
        raw: bytes = to_bytes(line, encoding)
        check_tag(raw, RecordType.NODE)
        fields = decode_fields(raw, NODE_LAYOUT, encoding)
        return cls(
            fields["id"],
            fields["type"],
            Coordinate(fields["x"], fields["y"]),
            fields["elevation"],
        )

    @classmethod
    def from_structure(cls, structure: Structure) -> "Node":
        return cls(
            structure["id"],
            structure["type"],
            Coordinate.from_structure(structure["coordinate"]),
            structure["elevation"],
        )

    def to_structure(self) -> Structure:
        return {
            "id": self.id,
            "type": self.type_,
            "coordinate": self.coordinate.to_structure(),
            "elevation": self.elevation,
        }

    def __lt__(self, other: "Node") -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self.id < other.id

    def __str__(self):
        return (
            f"Node(ID: {self.id}, Type: {self.type_}, "
            f"Coordinate: {self.coordinate}, Elevation: {self.elevation})"
        )


@dataclass(frozen=True)
class Link:
    """
    Basic map link: road segment between two nodes.

    Interpolation points describe the road shape from node 1 to node 2.
    """

    node1_id: int
    node2_id: int
    internal_record_id: int
    road_type: int
    length: int
    link_type: int
    coordinates: tuple[Coordinate, ...] = ()

    @classmethod
    def from_header(
        cls,
        line: Line,
        coordinates: bytes,
        encoding: str = DEFAULT_ENCODING,
    ) -> "Link":
        """
        Decode a link from its first line and its accumulated coordinates.

        :param line: first physical line of the link
        :param coordinates: coordinate text of all lines of the link
        """
        raw: bytes = to_bytes(line, encoding)
        check_tag(raw, RecordType.LINK)
        fields = decode_fields(raw, LINK_LAYOUT, encoding)

        count: int = fields["coordinate_count"]
        if count < 0:
            raise FieldValueError(
                f"field 'coordinate_count': negative count {count}"
            )
        text: bytes = coordinates[: count * COORDINATE_WIDTH]
        complete: int = len(text) // COORDINATE_WIDTH
        if complete != count:
            logger.warning(
                "Link %d-%d declares %d coordinates, found %d",
                fields["node1_id"],
                fields["node2_id"],
                count,
                complete,
            )

        return cls(
            fields["node1_id"],
            fields["node2_id"],
            fields["internal_record_id"],
            fields["road_type"],
            fields["length"],
            fields["link_type"],
            tuple(
                Coordinate.from_text(
                    text[index : index + COORDINATE_WIDTH]
                )
                for index in range(
                    0, complete * COORDINATE_WIDTH, COORDINATE_WIDTH
                )
            ),
        )

    @classmethod
    def from_line(
        cls, line: Line, encoding: str = DEFAULT_ENCODING
    ) -> "Link":
        """Decode a link that fits into a single line."""
        raw: bytes = to_bytes(line, encoding)
        return cls.from_header(raw, coordinate_slice(raw), encoding)

    @classmethod
    def from_structure(cls, structure: Structure) -> "Link":
        return cls(
            structure["node1_id"],
            structure["node2_id"],
            structure["internal_record_id"],
            structure["road_type"],
            structure["length"],
            structure["link_type"],
            tuple(
                Coordinate.from_structure(coordinate)
                for coordinate in structure["coordinates"]
            ),
        )

    def to_structure(self) -> Structure:
        return {
            "node1_id": self.node1_id,
            "node2_id": self.node2_id,
            "internal_record_id": self.internal_record_id,
            "road_type": self.road_type,
            "length": self.length,
            "link_type": self.link_type,
            "coordinates": [
                coordinate.to_structure() for coordinate in self.coordinates
            ],
        }

    def __lt__(self, other: "Link") -> bool:
        if not isinstance(other, Link):
            return NotImplemented
        return (self.node1_id, self.node2_id) < (
            other.node1_id,
            other.node2_id,
        )

    def __str__(self):
        coordinates: str = ", ".join(map(str, self.coordinates))
        return (
            f"Link(Nodes: ({self.node1_id}, {self.node2_id}), "
            f"Internal record ID: {self.internal_record_id}, "
            f"Road type: {self.road_type}, Length: {self.length}, "
            f"Link type: {self.link_type}, Coordinates: [{coordinates}])"
        )


@dataclass(frozen=True)
class Place:
    """Place name with its display position."""

    id: int
    type_: int
    coordinate: Coordinate
    name: str

    @classmethod
    def from_line(
        cls,
        line: Line,
        encoding: str = DEFAULT_ENCODING,
        name_width: int = DEFAULT_NAME_WIDTH,
    ) -> "Place":
        """
        Decode a place record line.

        The name is not terminated: the line gives its character count and
        every character is assumed to take `name_width` bytes.

        :param name_width: bytes per name character in the file encoding
        """
        raw: bytes = to_bytes(line, encoding)
        check_tag(raw, RecordType.PLACE)
        fields = decode_fields(raw, PLACE_LAYOUT, encoding)
        name_field = Field(
            "name",
            PLACE_NAME_OFFSET,
            name_width * fields["name_length"],
            FieldType.TEXT,
        )
        return cls(
            fields["id"],
            fields["type"],
            Coordinate(fields["x"], fields["y"]),
            name_field.decode(raw, encoding),
        )

    @classmethod
    def from_structure(cls, structure: Structure) -> "Place":
        return cls(
            structure["id"],
            structure["type"],
            Coordinate.from_structure(structure["coordinate"]),
            structure["name"],
        )

    def to_structure(self) -> Structure:
        return {
            "id": self.id,
            "type": self.type_,
            "coordinate": self.coordinate.to_structure(),
            "name": self.name,
        }

    def __lt__(self, other: "Place") -> bool:
        if not isinstance(other, Place):
            return NotImplemented
        return self.id < other.id

    def __str__(self):
        return (
            f"Place(ID: {self.id}, Type: {self.type_}, "
            f"Coordinate: {self.coordinate}, Name: {self.name})"
        )
