MAX_MESSAGE_BITS = 1024


def _short(value):
    """Render an integer for a message, abbreviating very large ones."""
    if isinstance(value, int) and not isinstance(value, bool):
        if value.bit_length() > MAX_MESSAGE_BITS:
            sign = "-" if value < 0 else ""
            return f"<{sign}{value.bit_length()}-bit integer>"
        return str(value)
    if hasattr(value, "num") and hasattr(value, "den"):
        if value.den == 1:
            return _short(value.num)
        return f"{_short(value.num)}/{_short(value.den)}"
    return repr(value)


class ReconstructionError(Exception):
    """Base class for everything that stops a secret from being recovered.

    Subclasses keep their diagnostic values as attributes and only turn them
    into text when the message is asked for.
    """

    def __init__(self, message=None):
        self._message = message
        super().__init__()

    @property
    def message(self):
        if self._message is not None:
            return self._message
        return self.describe()

    def describe(self):
        return self.__class__.__name__

    def __str__(self):
        return self.message


class InvalidBaseError(ReconstructionError):
    def __init__(self, base):
        self.base = base
        super().__init__()

    def describe(self):
        return f"Base {self.base!r} is not an integer between 2 and 36."


class InvalidDigitError(ReconstructionError):
    def __init__(self, char, base=None, position=None):
        self.char = char
        self.base = base
        self.position = position
        super().__init__()

    def describe(self):
        message = f"Invalid digit {self.char!r}"
        if self.base is not None:
            message += f" for base {self.base}"
        if self.position is not None:
            message += f" (position {self.position})"
        return message + "."


class ZeroDenominatorError(ReconstructionError, ZeroDivisionError):
    def __init__(self, numerator):
        self.numerator = numerator
        super().__init__()

    def describe(self):
        return f"Zero denominator in fraction {_short(self.numerator)}/0."


class DivisionByZeroError(ReconstructionError, ZeroDivisionError):
    def __init__(self, dividend):
        self.dividend = dividend
        super().__init__()

    def describe(self):
        return f"Division of {_short(self.dividend)} by zero."


class DuplicateXCoordinateError(ReconstructionError):
    def __init__(self, x):
        self.x = x
        super().__init__()

    def describe(self):
        return f"Two shares have the same x-coordinate {_short(self.x)}."


class NonIntegerResultError(ReconstructionError):
    def __init__(self, numerator, denominator):
        self.numerator = numerator
        self.denominator = denominator
        super().__init__()

    def describe(self):
        return (f"Non-integer result: {_short(self.numerator)}/{_short(self.denominator)}. "
                "Check the threshold and the shares.")


class InsufficientSharesError(ReconstructionError):
    def __init__(self, available, required):
        self.available = available
        self.required = required
        super().__init__()

    def describe(self):
        return f"Need {self.required} shares to reconstruct the secret, got {self.available}."


class MalformedDocumentError(ReconstructionError, ValueError):
    def __init__(self, reason):
        self.reason = reason
        super().__init__(f"Malformed share document: {reason}")
