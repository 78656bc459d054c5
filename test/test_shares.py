import json
import logging

import pytest

from errors import (DuplicateXCoordinateError, InsufficientSharesError,
                    InvalidBaseError, InvalidDigitError, MalformedDocumentError)
from shamir import Point, generate_shares
from shares import (EncodedShare, document_to_shares, dump_document, load_document, parse_document,
                    recover_document, select_points, write_document)


def test_recover_line(line_document):
    doc = parse_document(line_document)
    assert doc.k == 2
    assert doc.n == 3
    assert str(recover_document(doc)) == "1"


def test_recover_mixed_bases(mixed_base_document):
    assert recover_document(parse_document(mixed_base_document)) == 3


def test_threshold_override(mixed_base_document):
    doc = parse_document(mixed_base_document)
    assert recover_document(doc, threshold=4) == 3


def test_select_points_sorts_by_x():
    shares = {
        3: EncodedShare(3, 10, "12"),
        1: EncodedShare(1, 10, "4"),
        2: EncodedShare(2, 10, "7"),
    }
    assert select_points(shares, 2) == [Point(1, 4), Point(2, 7)]


def test_select_points_from_sequence():
    shares = [EncodedShare(2, 16, "ff"), EncodedShare(1, 2, "1010")]
    assert select_points(shares, 2) == [Point(1, 10), Point(2, 255)]


def test_select_points_insufficient():
    with pytest.raises(InsufficientSharesError) as excinfo:
        select_points({1: EncodedShare(1, 10, "4")}, 2)
    assert (excinfo.value.available, excinfo.value.required) == (1, 2)


def test_select_points_rejects_zero_threshold():
    with pytest.raises(MalformedDocumentError):
        select_points({1: EncodedShare(1, 10, "4")}, 0)


def test_invalid_digit_in_document(line_document):
    line_document["1"]["value"] = "4a"
    with pytest.raises(InvalidDigitError):
        recover_document(parse_document(line_document))


def test_threshold_as_string(line_document):
    line_document["keys"]["k"] = "2"
    assert parse_document(line_document).k == 2


def test_integer_base_accepted(line_document):
    line_document["2"]["base"] = 10
    assert recover_document(parse_document(line_document)) == 1


@pytest.mark.parametrize("base", ["ten", "40", "1", None, True])
def test_bad_base(line_document, base):
    line_document["1"]["base"] = base
    with pytest.raises(InvalidBaseError):
        parse_document(line_document)


@pytest.mark.parametrize("mutate", [
    lambda d: d.pop("keys"),
    lambda d: d["keys"].pop("k"),
    lambda d: d["keys"].update(k=0),
    lambda d: d["keys"].update(k="two"),
    lambda d: d.update({"abc": {"base": "10", "value": "1"}}),
    lambda d: d.update({"0": {"base": "10", "value": "1"}}),
    lambda d: d.update({"4": {"base": "10"}}),
    lambda d: d.update({"4": {"base": "10", "value": 17}}),
    lambda d: d.update({"4": "17"}),
])
def test_malformed_documents(line_document, mutate):
    mutate(line_document)
    with pytest.raises(MalformedDocumentError):
        parse_document(line_document)


def test_top_level_must_be_object():
    with pytest.raises(MalformedDocumentError):
        parse_document([1, 2, 3])


def test_same_index_twice(line_document):
    line_document["01"] = {"base": "10", "value": "5"}
    with pytest.raises(DuplicateXCoordinateError):
        parse_document(line_document)


def test_n_is_informational(line_document, caplog):
    line_document["keys"]["n"] = 10
    with caplog.at_level(logging.WARNING):
        doc = parse_document(line_document)
    assert len(doc.shares) == 3
    assert "n=10" in caplog.text


def test_n_is_optional(line_document):
    del line_document["keys"]["n"]
    assert parse_document(line_document).n is None


def test_load_document(write_json, line_document):
    path = write_json(line_document)
    assert recover_document(load_document(path)) == 1


def test_load_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(MalformedDocumentError):
        load_document(path)


def test_dump_document_round_trip(tmp_path):
    secret = 987654321987654321987654321
    points = generate_shares(secret, 3, 5)
    data = dump_document(points, 3, [2, 16, 36, 7, 10])
    assert data["keys"] == {"n": 5, "k": 3}
    assert data["2"]["base"] == "16"

    path = tmp_path / "shares.json"
    write_document(path, data)
    assert json.loads(path.read_text(encoding="utf-8")) == data
    assert recover_document(load_document(path)) == secret


def test_dump_document_needs_one_base_per_share():
    with pytest.raises(ValueError):
        dump_document([Point(1, 1), Point(2, 2)], 2, [10])


def test_document_to_shares(mixed_base_document):
    doc = parse_document(mixed_base_document)
    assert document_to_shares(doc) == [Point(1, 6), Point(2, 11), Point(3, 18)]
    assert document_to_shares(doc, threshold=1) == [Point(1, 6)]


@pytest.mark.parametrize("key", ["1_0", "+1", " 1", "1 ", "١٠", "0x1"])
def test_index_must_be_plain_decimal(line_document, key):
    line_document[key] = {"base": "10", "value": "5"}
    with pytest.raises(MalformedDocumentError):
        parse_document(line_document)


@pytest.mark.parametrize("base", ["1_0", "+10", " 10", "١٠"])
def test_base_must_be_plain_decimal(line_document, base):
    line_document["1"]["base"] = base
    with pytest.raises(InvalidBaseError):
        parse_document(line_document)


@pytest.mark.parametrize("k", ["2_0", " 2", "٢"])
def test_threshold_must_be_plain_decimal(line_document, k):
    line_document["keys"]["k"] = k
    with pytest.raises(MalformedDocumentError):
        parse_document(line_document)


def test_threshold_may_carry_a_sign(line_document):
    line_document["keys"]["k"] = "+2"
    assert parse_document(line_document).k == 2
