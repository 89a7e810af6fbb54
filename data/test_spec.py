#!/bin/env python3
"""
Test record spec.
"""
import json
import typing
import unittest
import yaml
from pathlib import Path

from jsonschema import validate

TESTS = Path(__file__).parent / "tests.yml"

with TESTS.open(encoding="utf-8") as input_file:
    CONFIGURATIONS: list[dict[str, typing.Any]] = [
        test for test in yaml.safe_load(input_file)
    ]
SCHEMA = json.loads((Path(__file__).parent / "spec-records.json").read_text())


def kind_schema(kind: str) -> dict[str, typing.Any]:
    """Restrict the record schema to one record kind."""
    return {**SCHEMA, "oneOf": [{"$ref": f"#/definitions/{kind}"}]}


class TestSpec(unittest.TestCase):
    def test_spec(self):
        for config in CONFIGURATIONS:
            with self.subTest(
                **{
                    k: v
                    for k, v in config.items()
                    if k in ("kind", "description")
                }
            ):
                validate(instance=config["output"], schema=SCHEMA)
                validate(
                    instance=config["output"],
                    schema=kind_schema(config["kind"]),
                )


if __name__ == "__main__":
    unittest.main()
