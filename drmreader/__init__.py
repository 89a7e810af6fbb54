"""
DRM (Digital RoadMap database) reader.
"""
from drmreader.core import Coordinate, Link, Node, Place, RecordType
from drmreader.exceptions import (
    CoordinateLengthError,
    DrmError,
    FieldValueError,
    FormatError,
    RecordTagError,
)
from drmreader.extract import extract_links, extract_nodes, extract_places
from drmreader.save import save_links, save_nodes, save_places

__all__ = [
    "Coordinate",
    "CoordinateLengthError",
    "DrmError",
    "FieldValueError",
    "FormatError",
    "Link",
    "Node",
    "Place",
    "RecordTagError",
    "RecordType",
    "extract_links",
    "extract_nodes",
    "extract_places",
    "save_links",
    "save_nodes",
    "save_places",
]
