"""
Share documents: JSON ingestion, point selection and the dealer's output format.

A document looks like::

    {
        "keys": {"n": 4, "k": 3},
        "1": {"base": "10", "value": "4"},
        "2": {"base": "2", "value": "111"},
        ...
    }
"""

import json
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Union

from basen import check_base, decode, encode
from errors import (DuplicateXCoordinateError, InsufficientSharesError,
                    InvalidBaseError, MalformedDocumentError)
from shamir import Point, lagrange_at_zero

logger = logging.getLogger(__name__)

KEYS_FIELD = "keys"
DECIMAL = re.compile(r"[0-9]+")
SIGNED_DECIMAL = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class EncodedShare:
    index: int
    """The share's x-coordinate."""
    base: int
    """Base of `digits`, between 2 and 36."""
    digits: str
    """The y-coordinate written in `base`."""

    def to_point(self) -> Point:
        return Point(self.index, decode(self.digits, self.base))


@dataclass
class ShareDocument:
    k: int
    shares: Dict[int, EncodedShare] = field(default_factory=dict)
    n: Optional[int] = None


def _parse_int(value, what, signed=False):
    if isinstance(value, bool):
        raise MalformedDocumentError(f"{what} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        pattern = SIGNED_DECIMAL if signed else DECIMAL
        if pattern.fullmatch(value):
            try:
                return int(value, 10)
            except ValueError:
                pass
    raise MalformedDocumentError(f"{what} must be an integer, got {value!r}")


def _parse_base(value):
    try:
        base = _parse_int(value, "base")
    except MalformedDocumentError:
        raise InvalidBaseError(value) from None
    return check_base(base)


def parse_share(key, entry) -> EncodedShare:
    index = _parse_int(key, "share index")
    if index < 1:
        raise MalformedDocumentError(f"share index must be positive, got {key!r}")
    if not isinstance(entry, Mapping):
        raise MalformedDocumentError(f"share {key!r} must be an object")
    if "base" not in entry or "value" not in entry:
        raise MalformedDocumentError(f"share {key!r} needs both 'base' and 'value'")
    digits = entry["value"]
    if not isinstance(digits, str):
        raise MalformedDocumentError(f"value of share {key!r} must be a string")
    return EncodedShare(index, _parse_base(entry["base"]), digits)


def parse_document(data) -> ShareDocument:
    """Turn decoded JSON into a ShareDocument, validating its shape."""
    if not isinstance(data, Mapping):
        raise MalformedDocumentError("top level must be an object")
    keys = data.get(KEYS_FIELD)
    if not isinstance(keys, Mapping) or "k" not in keys:
        raise MalformedDocumentError("missing 'keys.k' threshold")

    k = _parse_int(keys["k"], "keys.k", signed=True)
    if k < 1:
        raise MalformedDocumentError(f"threshold must be at least 1, got {k}")
    n = _parse_int(keys["n"], "keys.n", signed=True) if keys.get("n") is not None else None

    shares = {}
    for key, entry in data.items():
        if key == KEYS_FIELD:
            continue
        share = parse_share(key, entry)
        if share.index in shares:
            raise DuplicateXCoordinateError(share.index)
        shares[share.index] = share

    if n is not None and n != len(shares):
        logger.warning("Document declares n=%d but holds %d shares", n, len(shares))
    return ShareDocument(k=k, shares=shares, n=n)


def load_document(path) -> ShareDocument:
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except ValueError as exc:
            raise MalformedDocumentError(f"{path}: {exc}") from exc
    return parse_document(data)


def select_points(shares: Union[Mapping[int, EncodedShare], Iterable[EncodedShare]],
                  k: int) -> List[Point]:
    """Decode every share, sort by x and keep the first k points."""
    if k < 1:
        raise MalformedDocumentError(f"threshold must be at least 1, got {k}")

    if isinstance(shares, Mapping):
        points = [Point(_parse_int(key, "share index"), decode(s.digits, s.base))
                  for key, s in shares.items()]
    else:
        points = [s.to_point() for s in shares]

    if len(points) < k:
        raise InsufficientSharesError(len(points), k)

    points.sort(key=lambda p: p.x)
    return points[:k]


def document_to_shares(doc: ShareDocument, threshold: Optional[int] = None) -> List[Point]:
    """The k points of a document that take part in the reconstruction."""
    k = doc.k if threshold is None else threshold
    return select_points(doc.shares, k)


def recover_document(doc: ShareDocument, threshold: Optional[int] = None) -> int:
    points = document_to_shares(doc, threshold)
    logger.info("Reconstructing from shares %s", [p.x for p in points])
    return lagrange_at_zero(points)


def dump_document(points: Sequence[Point], k: int,
                  bases: Union[int, Sequence[int]] = 10) -> dict:
    """Build a share document for the given points.

    `bases` is either one base for every share or one base per point.
    """
    if isinstance(bases, int):
        bases = [bases] * len(points)
    if len(bases) != len(points):
        raise ValueError("Need one base per share.")

    data = {KEYS_FIELD: {"n": len(points), "k": k}}
    for point, base in zip(points, bases):
        data[str(point.x)] = {"base": str(base), "value": encode(point.y, base)}
    return data


def write_document(path, data: dict) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")
