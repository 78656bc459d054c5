import logging
from typing import Iterable, List, NamedTuple, Sequence, Tuple

from Crypto.Random import random

from errors import (DivisionByZeroError, DuplicateXCoordinateError,
                    InsufficientSharesError, NonIntegerResultError)
from rational import ONE, ZERO, Rational

logger = logging.getLogger(__name__)

DEFAULT_COEFF_BITS = 256


class Point(NamedTuple):
    x: int
    y: int


def eval_poly(coeffs: Sequence[int], x: int) -> int:
    """Evaluate polynomial at x over the integers. coeffs is [a_0, a_1, ..., a_d]."""
    result = 0
    for coeff in reversed(coeffs):
        result = result * x + coeff
    return result


def generate_shares(secret: int, k: int, n: int,
                    coeff_bits: int = DEFAULT_COEFF_BITS) -> List[Point]:
    """Generate n shares with threshold k on an integer polynomial.

    The polynomial has degree k - 1, constant term `secret` and random
    non-negative coefficients below 2**coeff_bits, so every y is a
    non-negative integer that can be written in any base.
    """
    if secret < 0:
        raise ValueError("Secret must be a non-negative integer.")
    if k < 1:
        raise ValueError("Threshold must be at least 1.")
    if n < k:
        raise ValueError("Threshold cannot be greater than the number of shares.")

    coeffs = [secret] + [random.getrandbits(coeff_bits) for _ in range(k - 1)]
    return [Point(x, eval_poly(coeffs, x)) for x in range(1, n + 1)]


def lagrange_basis_at_zero(points: Sequence[Point], i: int) -> Rational:
    """Value at x = 0 of the basis polynomial that is 1 at points[i]."""
    xi = points[i].x
    basis = ONE
    for j, (xj, _) in enumerate(points):
        if i == j:
            continue
        try:
            basis = basis.multiply(Rational.from_int(-xj)).divide(Rational.from_int(xi - xj))
        except DivisionByZeroError as exc:
            raise DuplicateXCoordinateError(xi) from exc
    return basis


def lagrange_at_zero(points: Sequence[Point]) -> int:
    """Recover f(0) from k points of a polynomial of degree < k.

    Every term is accumulated as an exact reduced fraction. A correct set of
    shares always sums to an integer; anything else raises
    NonIntegerResultError instead of being rounded.
    """
    k = len(points)
    if k == 0:
        raise InsufficientSharesError(0, 1)

    total = ZERO
    for i in range(k):
        term = Rational.from_int(points[i].y).multiply(lagrange_basis_at_zero(points, i))
        total = total.add(term)

    if not total.is_integer():
        raise NonIntegerResultError(total.num, total.den)

    logger.debug("Interpolated f(0) from %d points", k)
    return total.num


def reconstruct_secret(shares: Iterable[Tuple[int, int]]) -> int:
    """Recover the secret (polynomial at x=0) from (x, y) pairs."""
    return lagrange_at_zero([Point(x, y) for x, y in shares])


if __name__ == "__main__":
    secret = 1234
    threshold = 3
    num_shares = 5

    shares = generate_shares(secret, threshold, num_shares, coeff_bits=16)
    print("Generated Shares:")
    for s in shares:
        print(s)

    subset = shares[:threshold]
    recovered = reconstruct_secret(subset)
    print(f"\nReconstructed secret from {threshold} shares: {recovered}")
    assert recovered == secret
