"""
Builders of fixed-width DRM record lines for tests.
"""
from pathlib import Path
from typing import Iterable

from drmreader.core import Coordinate


def coordinates_text(coordinates: Iterable[Iterable[int]]) -> str:
    return "".join(Coordinate(x, y).to_text() for x, y in coordinates)


def node_line(
    id_: int, type_: int, x: int, y: int, elevation: int
) -> str:
    return f"21{id_:04d}00{x:05d}{y:05d}{elevation:03d}{type_:1d}"


def link_line(
    node1_id: int,
    node2_id: int,
    coordinate_count: int,
    coordinates: str = "",
    internal_record_id: int = 1,
    road_type: int = 3,
    length: int = 120,
    link_type: int = 1,
) -> str:
    return (
        f"22{node1_id:04d}{node2_id:04d}{internal_record_id:02d}0"
        f"{road_type:1d}"
        + "0" * 30
        + f"{length:05d}{link_type:1d}"
        + "0" * 38
        + f"{coordinate_count:03d}"
        + coordinates
    )


def place_line(
    id_: int, type_: int, x: int, y: int, name: str, name_length: int
) -> str:
    return (
        f"46 {id_:04d}0000{type_:02d}"
        + "0" * 10
        + f"{x:05d}{y:05d}{name_length:02d}"
        + name
    )


def write_drm(path: Path, lines: Iterable[str]) -> Path:
    path.write_bytes("".join(f"{line}\n" for line in lines).encode("utf-8"))
    return path
