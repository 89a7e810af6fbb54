"""
Test record collection serialization.
"""
import json
from pathlib import Path

from drmreader.core import Coordinate, Link, Node, Place
from drmreader.save import (
    save_links,
    save_nodes,
    save_places,
    save_structures,
)

NODES: list[Node] = [
    Node(3, 1, Coordinate(300, -30), 3),
    Node(1, 2, Coordinate(100, 10), 1),
]

LINKS: list[Link] = [
    Link(1, 3, 1, 3, 250, 1, (Coordinate(1, 2), Coordinate(-3, 4))),
    Link(1, 2, 1, 3, 90, 1),
]

PLACES: list[Place] = [
    Place(5, 1, Coordinate(1234, 5678), "東京"),
    Place(6, 2, Coordinate(-1, -2), "横浜市"),
]


def test_save_nodes(tmp_path: Path) -> None:
    path = tmp_path / "nodes.csv"

    assert save_nodes(NODES, path)
    assert path.read_text(encoding="utf-8") == "id,x,y\n3,300,-30\n1,100,10\n"


def test_save_links(tmp_path: Path) -> None:
    path = tmp_path / "links.csv"

    assert save_links(LINKS, path)
    assert path.read_text(encoding="utf-8").splitlines() == [
        "node1_id,node2_id,length,coordinates",
        "1,3,250,1,2,-3,4",
        "1,2,90",
    ]


def test_save_places(tmp_path: Path) -> None:
    path = tmp_path / "places.csv"

    assert save_places(PLACES, path)
    assert path.read_bytes() == (
        "name,x,y\n東京,1234,5678\n横浜市,-1,-2\n".encode("utf-8")
    )


def test_save_empty(tmp_path: Path) -> None:
    path = tmp_path / "nodes.csv"

    assert save_nodes([], path)
    assert path.read_text(encoding="utf-8") == "id,x,y\n"


def test_save_twice_is_identical(tmp_path: Path) -> None:
    for save, records in (
        (save_nodes, NODES),
        (save_links, LINKS),
        (save_places, PLACES),
    ):
        first = tmp_path / "first.csv"
        second = tmp_path / "second.csv"

        save(records, first)
        save(records, second)

        assert first.read_bytes() == second.read_bytes()


def test_save_structures(tmp_path: Path) -> None:
    path = tmp_path / "links.json"

    assert save_structures(LINKS, path)

    structures = json.loads(path.read_text(encoding="utf-8"))
    assert [
        Link.from_structure(structure) for structure in structures
    ] == LINKS


def test_save_structures_keeps_names(tmp_path: Path) -> None:
    path = tmp_path / "places.json"

    save_structures(PLACES, path)

    assert "東京" in path.read_text(encoding="utf-8")
