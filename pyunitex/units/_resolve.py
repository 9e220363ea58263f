"""
Resolution of unit expressions to base units, and the conversion
functions built on it.
"""
from __future__ import annotations

import math
import numbers
from typing import NamedTuple, Optional

import numpy as np

from ._convfn import ConversionFunction, Multiplicative, combine
from ._dims import DimVector, UnknownAxis
from ._errors import FormatError, IncompatibleDimensions
from ._opts import get_unit_options
from ._parse import UnitExpr, parse, split_exponent, term_text
from ._registry import get_registry

# Written by Eric J. Whitney, January 2020.

# ======================================================================


class Resolved(NamedTuple):
    """
    Unit expression reduced to base units.

    Attributes
    ----------
    dims : DimVector
        Dimensions of the expression.
    conv : ConversionFunction
        Converts a value in the expression's units to base units.
    """
    dims: DimVector
    conv: ConversionFunction


# ----------------------------------------------------------------------

def resolve_expression(units: str | UnitExpr, registry=None) -> Resolved:
    """
    Resolve unit expression `units` to its dimensions and conversion to
    base units.  Unknown symbols are each given their own dimension and a
    factor of one.

    Raises
    ------
    FormatError
        If any token has a malformed exponent, more than one unit in the
        expression has an offset or non-linear conversion, or such a
        unit is raised to a power or combined with other units in a way
        that does not allow conversion.

    Examples
    --------
    >>> res = resolve_expression('km h^-1')
    >>> print(res.dims)
    L T^-1
    >>> round(res.conv.factor, 12)
    0.277777777778
    """
    if registry is None:
        registry = get_registry()
    expr = parse(units, registry)

    parts = []
    for term in expr.terms:
        if term.is_unknown:
            if split_exponent(term.symbol)[1] is None:
                raise FormatError(f"Malformed exponent in '{term.symbol}' of "
                                  f"unit expression '{expr}'.")
            parts.append((DimVector.of({UnknownAxis(term.symbol): 1}),
                          Multiplicative(), term.exponent, str(term)))
            continue

        dims, conv = registry.expand(term.unit, strict=False)
        if term.prefix is not None:
            conv = conv.after(term.prefix.factor)
        parts.append((dims, conv, term.exponent, str(term)))

    return Resolved(*combine(parts))


def convert(value, from_units: str | UnitExpr, to_units: str | UnitExpr,
            registry=None):
    """
    Convert `value` from one set of units to another.  Where possible
    the type of `value` is preserved, so an integer gives an integer
    result if the converted value is a whole number.

    Parameters
    ----------
    value : scalar or array_like
        Value to convert.  Arrays are converted elementwise.
    from_units, to_units : str or UnitExpr
        Unit expressions.
    registry : Registry, optional
        Registry used to look up symbols, default is the process-wide
        registry.

    Returns
    -------
    Converted value.

    Raises
    ------
    IncompatibleDimensions
        If the units do not have the same dimensions.
    FormatError
        If either unit expression is malformed (see
        ``resolve_expression()``).

    Examples
    --------
    >>> convert(3, 'km', 'm')
    3000
    >>> round(convert(100, '°C', '°F'), 6)
    212.0
    >>> convert(3, 'm foo', 'mm foo')  # Unknown symbols pass through.
    3000
    """
    src, dst = _resolve_pair(from_units, to_units, registry)
    if (isinstance(src.conv, Multiplicative) and
            isinstance(dst.conv, Multiplicative)):
        result = value * (src.conv.factor / dst.conv.factor)
    else:
        result = dst.conv.from_base(src.conv.to_base(value))

    return _match_type(result, value)


def factor(from_units: str | UnitExpr, to_units: str | UnitExpr,
           registry=None) -> Optional[float]:
    """
    Returns the multiplier converting values in `from_units` to
    `to_units`, or `None` if either has an offset or non-linear
    conversion (in which case use ``convert()``).

    Raises
    ------
    IncompatibleDimensions
        If the units do not have the same dimensions.

    Examples
    --------
    >>> factor('kg', 't')
    0.001
    >>> factor('K', '°C') is None
    True
    """
    src, dst = _resolve_pair(from_units, to_units, registry)
    if not (isinstance(src.conv, Multiplicative) and
            isinstance(dst.conv, Multiplicative)):
        return None
    return src.conv.factor / dst.conv.factor


def convertible(units_a: str | UnitExpr, units_b: str | UnitExpr,
                registry=None) -> bool:
    """
    Returns `True` if values can be converted between `units_a` and
    `units_b`, i.e. they have the same dimensions.

    Examples
    --------
    >>> convertible('s', 'min')
    True
    >>> convertible('J', 'W')
    False
    """
    if registry is None:
        registry = get_registry()
    return (resolve_expression(units_a, registry).dims ==
            resolve_expression(units_b, registry).dims)


def equivalent(value, units_a: str | UnitExpr, units_b: str | UnitExpr,
               registry=None) -> bool:
    """
    Returns `True` if `value` in `units_a` has the same numerical value
    in `units_b` (in both directions), to within relative tolerance
    ``rel_tol`` (see ``set_unit_options``).

    Examples
    --------
    >>> equivalent(1, 'J', 'N m')
    True
    >>> equivalent(1, 's', 'min')
    False
    """
    if registry is None:
        registry = get_registry()
    if not convertible(units_a, units_b, registry):
        return False

    rel_tol = get_unit_options().rel_tol
    fwd = convert(value, units_a, units_b, registry)
    rev = convert(fwd, units_b, units_a, registry)
    return bool(np.allclose(fwd, value, rtol=rel_tol, atol=0) and
                np.allclose(rev, value, rtol=rel_tol, atol=0))


def proportional(units_a: str | UnitExpr, units_b: str | UnitExpr,
                 registry=None) -> bool:
    """
    Returns `True` if both units are multiplicative and every base
    dimension of `units_a` appears in `units_b` with the same exponent.

    Examples
    --------
    >>> proportional('kg', 'J')
    True
    >>> proportional('W', 'W m')
    False
    """
    if registry is None:
        registry = get_registry()
    res_a = resolve_expression(units_a, registry)
    res_b = resolve_expression(units_b, registry)
    if not (isinstance(res_a.conv, Multiplicative) and
            isinstance(res_b.conv, Multiplicative)):
        return False
    return all(res_b.dims.exp(axis) == exp for axis, exp in res_a.dims.items())


def is_valid(units: str | UnitExpr, registry=None) -> bool:
    """
    Returns `True` if every symbol in `units` is a registered (or level)
    unit and the expression can be resolved.  An empty expression is
    valid.

    Examples
    --------
    >>> is_valid('kg m s^-2')
    True
    >>> is_valid('kg m foo')
    False
    >>> is_valid('°C °F')
    False
    """
    if registry is None:
        registry = get_registry()
    expr = parse(units, registry)
    if expr.unknowns():
        return False
    try:
        resolve_expression(expr, registry)
    except FormatError:
        return False
    return True


def to_base_symbols(dims: DimVector, registry=None,
                    unicode: bool = None) -> str:
    """
    Generate unit text for `dims` using the base unit of each axis.
    Axes without a registered base unit (including unknown symbols)
    are written verbatim.

    Examples
    --------
    >>> from pyunitex.units import DimVector
    >>> to_base_symbols(DimVector.of(M=1, L=1, T=-2))
    'kg m s^-2'
    """
    if registry is None:
        registry = get_registry()
    if unicode is None:
        unicode = get_unit_options().unicode_str

    parts = []
    for axis, exp in dims.items():
        if isinstance(axis, UnknownAxis):
            symbol = str(axis)
        else:
            symbol = registry.base_symbol(axis) or str(axis)
        parts.append(term_text(symbol, exp, unicode))
    return ' '.join(parts)


# -- Private Functions -------------------------------------------------

def _resolve_pair(from_units, to_units, registry
                  ) -> tuple[Resolved, Resolved]:
    if registry is None:
        registry = get_registry()
    src = resolve_expression(from_units, registry)
    dst = resolve_expression(to_units, registry)
    if src.dims != dst.dims:
        raise IncompatibleDimensions(
            f"Cannot convert '{from_units}' ({str(src.dims) or '1'}) -> "
            f"'{to_units}' ({str(dst.dims) or '1'}).")
    return src, dst


def _match_type(result, value):
    # Integer inputs give integer results where there is no remainder.
    if isinstance(value, numbers.Integral) and not isinstance(value, bool):
        if isinstance(result, numbers.Real) and math.isfinite(result):
            as_int = int(result)
            if as_int - result == 0:
                return as_int
    return result
