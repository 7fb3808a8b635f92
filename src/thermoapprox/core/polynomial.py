import logging
import re
from collections import Counter
from numbers import Real
from typing import Iterable, Optional, Sequence, Tuple, Union

import numpy as np
import sympy as sp

from thermoapprox.core.exceptions import DegreeCollisionError, EmptyInputError

logger = logging.getLogger(__name__)

Number = Union[int, float]

# sign, coefficient, power of x, exponent
_TERM_PATTERN = re.compile(r'([+-]?)(\d+(?:\.\d+)?(?:e[+-]?\d+)?)?(x(?:\^(\d+))?)?')


def _format_number(value: float) -> str:
    """Render integral floats without a fractional part."""
    if value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    return repr(value)


def _format_term(value: float, degree: int) -> str:
    if degree == 0:
        return _format_number(value)
    power = 'x' if degree == 1 else f'x^{degree}'
    if value == 1.0:
        return power
    if value == -1.0:
        return f'-{power}'
    return f'{_format_number(value)}{power}'


def _canonical(coefficients: Sequence[float]) -> Tuple[float, ...]:
    """Trim trailing zero coefficients down to a minimum length of 1."""
    end = len(coefficients)
    while end > 1 and coefficients[end - 1] == 0.0:
        end -= 1
    return tuple(coefficients[:end])


class Polynomial:
    """
    Dense single-variable polynomial with real coefficients.

    Coefficients are stored in ascending degree order, ``coefficients[i]`` being
    the coefficient of ``x**i``. Instances are immutable and always canonical:
    the leading coefficient is non-zero unless the polynomial is the constant
    ``0``, which is stored as ``(0.0,)``.
    """

    __slots__ = ('_coefficients',)

    def __init__(self, coefficients: Iterable[Number]) -> None:
        values = [float(value) for value in coefficients]
        if not values:
            raise EmptyInputError("coefficients")
        self._coefficients = _canonical(values)

    # --- Constructors ---
    @classmethod
    def from_coefficients(cls, values: Iterable[Number]) -> 'Polynomial':
        """Build a polynomial from ascending-degree coefficients."""
        return cls(values)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[int, Number]]) -> 'Polynomial':
        """
        Build a polynomial from ``(degree, value)`` pairs.
        Args:
            pairs: Degree/coefficient pairs in any order. Degrees that are not
                named get a zero coefficient.
        Returns:
            The canonical polynomial.
        Raises:
            EmptyInputError: If no pairs are given
            DegreeCollisionError: If any degree is named more than once
            ValueError: If a degree is negative
        """
        pairs = [(int(degree), float(value)) for degree, value in pairs]
        if not pairs:
            raise EmptyInputError("degree/value pairs")
        counts = Counter(degree for degree, _ in pairs)
        collisions = [degree for degree, count in counts.items() if count > 1]
        if collisions:
            raise DegreeCollisionError(collisions)
        if min(counts) < 0:
            raise ValueError(f"Polynomial degrees must be non-negative, got {min(counts)}")
        coefficients = [0.0] * (max(counts) + 1)
        for degree, value in pairs:
            coefficients[degree] = value
        return cls(coefficients)

    @classmethod
    def lagrange(cls, samples: Iterable[Tuple[Number, Number]]) -> 'Polynomial':
        """
        Interpolate the unique polynomial of degree <= n-1 through n samples.

        The result is the Lagrange basis sum ``sum(y_i * L_i(x))`` where
        ``L_i(x) = prod((x - x_j) / (x_i - x_j) for j != i)``. The sample x
        values must be distinct; a repeated x raises ``ZeroDivisionError``.
        Args:
            samples: ``(x, y)`` pairs
        Returns:
            The interpolating polynomial.
        Raises:
            EmptyInputError: If no samples are given
        """
        samples = [(float(x), float(y)) for x, y in samples]
        if not samples:
            raise EmptyInputError("interpolation samples")
        logger.debug("Building Lagrange polynomial through %d samples", len(samples))
        result = cls((0.0,))
        for i, (x_i, y_i) in enumerate(samples):
            basis = cls((1.0,))
            denominator = 1.0
            for j, (x_j, _) in enumerate(samples):
                if j == i:
                    continue
                basis = basis * cls((-x_j, 1.0))
                denominator *= x_i - x_j
            result = result + basis * (y_i / denominator)
        logger.debug("Lagrange polynomial of degree %d: %s", result.degree, result)
        return result

    @classmethod
    def parse(cls, text: str) -> 'Polynomial':
        """
        Parse the canonical rendering produced by ``str(polynomial)``.
        Raises:
            ValueError: If the text is empty or a term is malformed
            DegreeCollisionError: If two terms have the same degree, as in ``x + x``
        """
        compact = ''.join(text.split())
        if not compact:
            raise ValueError("Cannot parse a polynomial from empty text")
        pairs = []
        position = 0
        while position < len(compact):
            match = _TERM_PATTERN.match(compact, position)
            sign, number, power, exponent = match.groups()
            if number is None and power is None:
                raise ValueError(f"Invalid polynomial term at position {position} in '{text}'")
            if position > 0 and not sign:
                raise ValueError(f"Missing sign between terms at position {position} in '{text}'")
            value = float(number) if number is not None else 1.0
            if sign == '-':
                value = -value
            if power is None:
                degree = 0
            else:
                degree = int(exponent) if exponent is not None else 1
            pairs.append((degree, value))
            position = match.end()
        return cls.from_pairs(pairs)

    # --- Properties ---
    @property
    def coefficients(self) -> Tuple[float, ...]:
        return self._coefficients

    @property
    def degree(self) -> int:
        return len(self._coefficients) - 1

    def is_zero(self) -> bool:
        return self._coefficients == (0.0,)

    def coefficient(self, degree: int) -> Optional[float]:
        """Coefficient of ``x**degree``, or None above the polynomial's degree."""
        if degree < 0:
            raise ValueError(f"Polynomial degrees must be non-negative, got {degree}")
        if degree > self.degree:
            return None
        return self._coefficients[degree]

    # --- Evaluation ---
    def evaluate(self, x: Number) -> float:
        return sum(c * x ** i for i, c in enumerate(self._coefficients))

    __call__ = evaluate

    def evaluate_many(self, xs) -> np.ndarray:
        """Evaluate at every point of an array-like."""
        return np.polynomial.polynomial.polyval(np.asarray(xs, dtype=np.float64), self._coefficients)

    def as_expr(self, symbol: Optional[sp.Symbol] = None) -> sp.Expr:
        """Return the polynomial as a SymPy expression in ``symbol`` (default ``x``)."""
        symbol = symbol if symbol is not None else sp.Symbol('x')
        return sp.Poly(list(reversed(self._coefficients)), symbol).as_expr()

    # --- Arithmetic ---
    @classmethod
    def _coerce(cls, other) -> Optional['Polynomial']:
        if isinstance(other, Polynomial):
            return other
        if isinstance(other, Real):
            return cls((other,))
        return None

    def __neg__(self) -> 'Polynomial':
        return Polynomial(-c for c in self._coefficients)

    def __add__(self, other) -> 'Polynomial':
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        length = max(len(self._coefficients), len(other._coefficients))
        lhs = self._coefficients + (0.0,) * (length - len(self._coefficients))
        rhs = other._coefficients + (0.0,) * (length - len(other._coefficients))
        return Polynomial(a + b for a, b in zip(lhs, rhs))

    __radd__ = __add__

    def __sub__(self, other) -> 'Polynomial':
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self + -other

    def __rsub__(self, other) -> 'Polynomial':
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other + -self

    def __mul__(self, other) -> 'Polynomial':
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        product = [0.0] * (len(self._coefficients) + len(other._coefficients) - 1)
        for i, a in enumerate(self._coefficients):
            for j, b in enumerate(other._coefficients):
                product[i + j] += a * b
        return Polynomial(product)

    __rmul__ = __mul__

    # --- Comparison and rendering ---
    def __eq__(self, other) -> bool:
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self._coefficients == other._coefficients

    def __hash__(self) -> int:
        return hash(self._coefficients)

    def __repr__(self) -> str:
        return f"Polynomial({list(self._coefficients)})"

    def __str__(self) -> str:
        if self.degree == 0:
            return _format_number(self._coefficients[0])
        terms = []
        for degree in range(self.degree, -1, -1):
            value = self._coefficients[degree]
            if value == 0.0:
                continue
            if not terms:
                terms.append(_format_term(value, degree))
            else:
                sign = '-' if value < 0 else '+'
                terms.append(f"{sign} {_format_term(abs(value), degree)}")
        return ' '.join(terms)
