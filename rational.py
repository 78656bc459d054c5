from sympy import igcd

from errors import DivisionByZeroError, ZeroDenominatorError


class Rational:
    """Exact fraction over Python ints, always stored in lowest terms.

    The denominator is kept positive and gcd(|num|, den) == 1, so two
    Rationals are equal exactly when their numerators and denominators are.
    Instances are never modified; every operation returns a new value.
    """

    __slots__ = ("_num", "_den")

    def __init__(self, num: int, den: int = 1):
        if den == 0:
            raise ZeroDenominatorError(num)
        if den < 0:
            num, den = -num, -den
        g = igcd(num, den)
        self._num = num // g
        self._den = den // g

    @classmethod
    def from_int(cls, value: int) -> 'Rational':
        return cls(value, 1)

    @property
    def num(self) -> int:
        return self._num

    @property
    def den(self) -> int:
        return self._den

    def is_integer(self) -> bool:
        return self._den == 1

    def add(self, other: 'Rational') -> 'Rational':
        return Rational(self._num * other._den + other._num * self._den,
                        self._den * other._den)

    def subtract(self, other: 'Rational') -> 'Rational':
        return self.add(other.negate())

    def multiply(self, other: 'Rational') -> 'Rational':
        return Rational(self._num * other._num, self._den * other._den)

    def divide(self, other: 'Rational') -> 'Rational':
        if other._num == 0:
            raise DivisionByZeroError(self)
        return Rational(self._num * other._den, self._den * other._num)

    def negate(self) -> 'Rational':
        return Rational(-self._num, self._den)

    @staticmethod
    def _coerce(other):
        if isinstance(other, Rational):
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return Rational(other)
        return None

    def __add__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.add(other)

    __radd__ = __add__

    def __sub__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other.subtract(self)

    def __mul__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.multiply(other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.divide(other)

    def __rtruediv__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other.divide(self)

    def __neg__(self):
        return self.negate()

    def __eq__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self._num == other._num and self._den == other._den

    def __hash__(self):
        if self._den == 1:
            return hash(self._num)
        return hash((self._num, self._den))

    def __int__(self):
        if self._den != 1:
            raise TypeError(f"{self} is not an integer")
        return self._num

    def __repr__(self):
        return f"Rational({self._num}, {self._den})"

    def __str__(self):
        if self._den == 1:
            return str(self._num)
        return f"{self._num}/{self._den}"


ZERO = Rational(0)
ONE = Rational(1)
