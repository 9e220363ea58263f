from __future__ import annotations

from fractions import Fraction
from typing import NamedTuple, Hashable, Iterator, Mapping

# Written by Eric J. Whitney, January 2020.

# ======================================================================

BASE_AXES = ('M', 'L', 'T', 'θ', 'N', 'I', 'J')
"""Names of the seven fixed SI dimension axes, in display order."""

_ZERO = Fraction(0)


# ----------------------------------------------------------------------

class UnknownAxis(NamedTuple):
    """
    Dimension axis belonging to a symbol that is not registered.  Each
    distinct symbol text gives a distinct axis, so identical unknown
    symbols cancel or combine with each other but never with anything
    else.

    Examples
    --------
    >>> UnknownAxis('foo') == UnknownAxis('foo')
    True
    >>> UnknownAxis('foo') == 'foo'
    False
    """
    text: str

    def __str__(self):
        return self.text


def _axis_key(axis: Hashable) -> tuple[bool, str]:
    # Named catalog axes sort before unknown symbol axes.
    return isinstance(axis, UnknownAxis), str(axis)


# ----------------------------------------------------------------------

class DimVector(NamedTuple):
    """
    ``DimVector`` is an immutable vector of rational exponents over the
    seven SI base dimensions, plus any number of `extra` axes.  Extra
    axes are either names of non-SI base dimensions defined by a unit
    catalog (e.g. ``'bit'``) or ``UnknownAxis`` entries for unregistered
    symbols.

    Field names in order:
        - M:  Mass.
        - L:  Length.
        - T:  Time.
        - θ:  Temperature.
        - N:  Amount of substance.
        - I:  Electric current.
        - J:  Luminous intensity.
        - extra:  Sorted tuple of ``(axis, exponent)`` pairs, zeros
          omitted.

    Two vectors are equal when every axis has the same exponent.  Use
    ``DimVector.of()`` to construct vectors so that the `extra` field
    is kept in canonical form.

    Examples
    --------
    >>> force = DimVector.of({'M': 1, 'L': 1, 'T': -2})
    >>> print(force)
    M L T^-2
    >>> print(force * 2 + DimVector.of(L=-2))
    M^2 T^-4
    >>> DimVector.of(L=Fraction(1, 2)) * 2 == DimVector.of(L=1)
    True
    """
    M: Fraction = _ZERO
    L: Fraction = _ZERO
    T: Fraction = _ZERO
    θ: Fraction = _ZERO
    N: Fraction = _ZERO
    I: Fraction = _ZERO
    J: Fraction = _ZERO
    extra: tuple[tuple[Hashable, Fraction], ...] = ()

    @classmethod
    def of(cls, axes: Mapping[Hashable, int | Fraction] = None,
           **kwargs) -> DimVector:
        """
        Make a vector from a mapping and / or keyword arguments of
        ``axis: exponent``.  Repeated axes are summed.
        """
        totals = {}
        for src in (axes or {}), kwargs:
            for axis, exp in src.items():
                totals[axis] = totals.get(axis, _ZERO) + Fraction(exp)

        base = {a: totals.pop(a, _ZERO) for a in BASE_AXES}
        extra = tuple(sorted(((a, e) for a, e in totals.items() if e != 0),
                             key=lambda x: _axis_key(x[0])))
        return cls(**base, extra=extra)

    # -- Queries -------------------------------------------------------

    def exp(self, axis: Hashable) -> Fraction:
        """Exponent of the given axis (zero if absent)."""
        if axis in BASE_AXES:
            return getattr(self, axis)
        for other, exp in self.extra:
            if other == axis:
                return exp
        return _ZERO

    def items(self) -> Iterator[tuple[Hashable, Fraction]]:
        """Iterate over ``(axis, exponent)`` for non-zero axes in display
        order."""
        for axis in BASE_AXES:
            exp = getattr(self, axis)
            if exp != 0:
                yield axis, exp
        yield from self.extra

    def is_dimensionless(self) -> bool:
        return not any(True for _ in self.items())

    def is_integral(self) -> bool:
        """True if every exponent is a whole number."""
        return all(exp.denominator == 1 for _, exp in self.items())

    def known(self) -> DimVector:
        """Return a copy with all ``UnknownAxis`` entries removed."""
        return self._replace(extra=tuple(
            (a, e) for a, e in self.extra if not isinstance(a, UnknownAxis)))

    def unknowns(self) -> tuple[tuple[UnknownAxis, Fraction], ...]:
        return tuple((a, e) for a, e in self.extra
                     if isinstance(a, UnknownAxis))

    # -- Operators -----------------------------------------------------

    def __add__(self, rhs: DimVector) -> DimVector:
        if not isinstance(rhs, DimVector):
            return NotImplemented
        return self._merge(rhs, 1)

    def __sub__(self, rhs: DimVector) -> DimVector:
        if not isinstance(rhs, DimVector):
            return NotImplemented
        return self._merge(rhs, -1)

    def __neg__(self) -> DimVector:
        return self * -1

    def __mul__(self, k: int | Fraction) -> DimVector:
        if isinstance(k, DimVector):
            return NotImplemented
        k = Fraction(k)
        return DimVector.of({a: e * k for a, e in self.items()})

    __rmul__ = __mul__

    def __str__(self):
        parts = []
        for axis, exp in self.items():
            parts.append(str(axis) if exp == 1 else f"{axis}^{exp}")
        return ' '.join(parts)

    # -- Private -------------------------------------------------------

    def _merge(self, rhs: DimVector, sign: int) -> DimVector:
        totals = dict(self.items())
        for axis, exp in rhs.items():
            totals[axis] = totals.get(axis, _ZERO) + sign * exp
        return DimVector.of(totals)
