"""
Conversion functions taking a value in some unit to the equivalent value
in base units (and back).  Three kinds exist:

    - ``Multiplicative``:  A single factor, e.g. km -> m.
    - ``Affine``: A factor plus an offset, e.g. °C -> K.
    - ``General``:  Any invertible function, e.g. logarithmic level
      units referenced to some value.

All kinds provide the same ``to_base()`` / ``from_base()`` interface so
that a conversion is always ``dst.from_base(src.to_base(value))``.
"""
from __future__ import annotations

from typing import NamedTuple, Callable, Iterable, Union

from ._dims import DimVector
from ._errors import FormatError

# Written by Eric J. Whitney, January 2020.

# ======================================================================


class Multiplicative(NamedTuple):
    """Conversion to base units by a single factor."""
    factor: float = 1.0

    def to_base(self, x):
        return x * self.factor

    def from_base(self, x):
        return x / self.factor

    def then(self, k: float) -> Multiplicative:
        """Scale the output (i.e. base units are `k` times larger)."""
        return Multiplicative(self.factor * k)

    def after(self, p: float) -> Multiplicative:
        """Scale the input (e.g. by a unit prefix)."""
        return Multiplicative(self.factor * p)


class Affine(NamedTuple):
    """
    Conversion to base units of the form ``x * factor + offset``.  Used
    for temperature scales with an offset zero.

    Examples
    --------
    >>> deg_c = Affine(1.0, 273.15)
    >>> deg_c.to_base(25.0)
    298.15
    >>> round(deg_c.from_base(298.15), 10)
    25.0
    """
    factor: float
    offset: float

    def to_base(self, x):
        return x * self.factor + self.offset

    def from_base(self, x):
        return (x - self.offset) / self.factor

    def then(self, k: float) -> Affine:
        return Affine(self.factor * k, self.offset * k)

    def after(self, p: float) -> Affine:
        # Prefixes scale the value only, never the offset.
        return Affine(self.factor * p, self.offset)


class General(NamedTuple):
    """
    Conversion to base units by an arbitrary monotonic function `fwd`
    with inverse `rev`.
    """
    fwd: Callable
    rev: Callable

    def to_base(self, x):
        return self.fwd(x)

    def from_base(self, x):
        return self.rev(x)

    def then(self, k: float) -> General:
        fwd, rev = self.fwd, self.rev
        return General(lambda x: fwd(x) * k, lambda x: rev(x / k))

    def after(self, p: float) -> General:
        fwd, rev = self.fwd, self.rev
        return General(lambda x: fwd(x * p), lambda x: rev(x) / p)


ConversionFunction = Union[Multiplicative, Affine, General]


# ----------------------------------------------------------------------

def combine(parts: Iterable[tuple[DimVector, ConversionFunction,
                                  object, str]]
            ) -> tuple[DimVector, ConversionFunction]:
    """
    Combine the parts of a unit expression into a single dimension
    vector and conversion function.

    Parameters
    ----------
    parts : Iterable[(DimVector, ConversionFunction, exponent, str)]
        For each term of the expression:  Its dimensions, conversion
        to base units (with any prefix already applied), rational
        exponent and display text.

    Returns
    -------
    dims, conv : DimVector, ConversionFunction
        `conv` is ``Multiplicative`` unless one term is affine or
        general, in which case it takes that kind.

    Raises
    ------
    FormatError
        If more than one term is affine / general, if such a term has an
        exponent other than 1, or if a general term is combined with
        other dimensioned terms.
    """
    dims, mult = DimVector(), 1.0
    special, special_text = None, None
    dimensioned = []  # [(text, conv), ...]
    for vec, conv, exp, text in parts:
        dims = dims + vec * exp
        if not vec.is_dimensionless():
            dimensioned.append((text, conv))

        if isinstance(conv, Multiplicative):
            mult *= conv.factor ** exp
            continue

        if special is not None:
            raise FormatError(f"Only one unit with an offset or non-linear "
                              f"conversion is allowed, got '{special_text}' "
                              f"and '{text}'.")
        if exp != 1:
            raise FormatError(f"Unit '{text}' has an offset or non-linear "
                              f"conversion and can't be raised to a power.")
        special, special_text = conv, text

    if special is None:
        return dims, Multiplicative(mult)

    others = [text for text, conv in dimensioned if conv is not special]
    if isinstance(special, General) and others:
        raise FormatError(f"Non-linear unit '{special_text}' can't be "
                          f"combined with other dimensioned units, got: "
                          f"{', '.join(repr(t) for t in others)}.")

    return dims, special.then(mult)
