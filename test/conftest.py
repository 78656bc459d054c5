import json

import pytest


@pytest.fixture
def line_document():
    # with k = 2 the first two shares give f(x) = 3x + 1
    return {
        "keys": {"n": 3, "k": 2},
        "1": {"base": "10", "value": "4"},
        "2": {"base": "10", "value": "7"},
        "3": {"base": "10", "value": "12"},
    }


@pytest.fixture
def mixed_base_document():
    # f(x) = x^2 + 2x + 3 with each y written in a different base
    return {
        "keys": {"n": 4, "k": 3},
        "1": {"base": "2", "value": "110"},
        "2": {"base": "16", "value": "B"},
        "3": {"base": 36, "value": "i"},
        "4": {"base": "8", "value": "33"},
    }


@pytest.fixture
def write_json(tmp_path):
    def _write(data, name="input.json"):
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write
