"""
Logarithmic level units referenced to a fixed quantity.

A level unit is written as ``log(re <value> <units>)`` (bel) or
``ln(re <value> <units>)`` (neper) and may take an SI prefix, so that
decibels referenced to one milliwatt are ``dlog(re 1 mW)``.  Whether a
level describes a power (or energy) quantity or a root-power (field)
quantity is inferred from the reference units:

    - Root-power quantities such as voltage or current are squared
      before the logarithm is taken, i.e. a level of 1 B is
      ``ref * 10^(1/2)``.
    - Power quantities such as power, energy or intensity are used
      directly, i.e. a level of 1 B is ``ref * 10``.

Conversions use numpy, so arrays are accepted and a zero input gives
``-inf`` with numpy's usual warning.
"""
from __future__ import annotations

import re
import warnings
from typing import Optional

import numpy as np

from ._convfn import General, Multiplicative
from ._dims import DimVector
from ._errors import FormatError, DefinitionError
from ._unitdef import UnitDef, Match

# Written by Eric J. Whitney, January 2020.

# ======================================================================

POWER = 'power'
ROOT_POWER = 'root-power'

_LEVEL_KINDS = {'log': 'bel', 'ln': 'neper'}

# Units that identify each reference type.  Root-power units are
# checked first.
_REF_TYPE_UNITS = (
    (ROOT_POWER, ('A', 'T', 'V', 'm s^-1', 'A s m^-2', 'N C^-1', 'C m^-1',
                  'C m^-2', 'C m^-3', 'N kg^-1')),
    (POWER, ('W', 'W m^-1', 'W m^-2', 'W m^-3', 'J', 'J m^-1', 'J m^-2',
             'K', 'cd', 'cd m^-1', 'cd m^-2', 'cd m^-3', 'Gy', 'Sv',
             'mm^6 m^-3'))
)

_LEVEL_RX = re.compile(r'''
    (?P<prefix>\S*?)
    (?P<kind>log|ln)
    \(re[\s,]+
    (?P<value>[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)
    [\s, ]+
    (?P<units>[^()]*?)\s*\)
    ''', re.VERBOSE)


# ----------------------------------------------------------------------

def level_symbol(kind: str, value: float, units: str) -> str:
    """
    Generate the symbol for a level unit.

    Parameters
    ----------
    kind : str
        ``'log'`` for bel or ``'ln'`` for neper.
    value : float
        Reference value.
    units : str
        Units of the reference value.

    Examples
    --------
    >>> level_symbol('log', 1, 'mW')
    'log(re 1 mW)'
    >>> 'd' + level_symbol('log', 1.03, 'mV')
    'dlog(re 1.03 mV)'
    """
    if kind not in _LEVEL_KINDS:
        raise ValueError(f"Level kind must be one of "
                         f"{', '.join(_LEVEL_KINDS)}, got '{kind}'.")
    value_str = repr(float(value))
    if value_str.endswith('.0'):
        value_str = value_str[:-2]
    return f"{kind}(re {value_str} {' '.join(units.split())})"


def level_unit(kind: str, value: float, units: str,
               registry=None) -> UnitDef:
    """
    Make an (unregistered) definition of a level unit in `units`
    referenced to `value`.

    Raises
    ------
    FormatError
        If the reference value is not positive or the reference units
        are malformed or not multiplicative.
    """
    if registry is None:
        from ._registry import get_registry
        registry = get_registry()

    symbol = level_symbol(kind, value, units)
    if not value > 0:
        raise FormatError(f"Reference value of '{symbol}' must be > 0.")

    try:
        dims, conv = registry.expand_text(units, strict=False)
    except DefinitionError as e:
        raise FormatError(f"Invalid reference units in '{symbol}'.") from e
    if not isinstance(conv, Multiplicative):
        raise FormatError(f"Reference units of '{symbol}' must be "
                          f"multiplicative.")

    ref_type = reference_type(dims, registry)
    if ref_type is None:
        warnings.warn(f"Could not determine whether '{symbol}' is a power "
                      f"or root-power level, assuming power.")
        ref_type = POWER

    return UnitDef(symbols=(symbol,), basis=units,
                   conv=_level_conversion(kind, float(value), ref_type),
                   prefixes=frozenset({'SI'}), reference=False,
                   name=f"{_LEVEL_KINDS[kind]} {ref_type} level")


def match_level(symbol: str, registry) -> Optional[Match]:
    """
    If `symbol` is a (possibly prefixed) level unit, return a ``Match``
    for it, otherwise `None`.  An invalid level symbol gives a warning
    and `None`.
    """
    match = _LEVEL_RX.fullmatch(symbol)
    if not match:
        return None

    prefix_text, prefix = match['prefix'], None
    if prefix_text:
        prefix = registry.prefix(prefix_text)
        if prefix is None or prefix.system != 'SI':
            return None

    try:
        unit = level_unit(match['kind'], float(match['value']),
                          match['units'], registry)
    except FormatError as e:
        warnings.warn(f"{e} Treating '{symbol}' as an unknown unit.")
        return None

    return Match(unit, prefix, prefix_text)


def reference_type(dims: DimVector, registry) -> Optional[str]:
    """
    Return ``ROOT_POWER`` or ``POWER`` according to the kind of
    quantity having dimensions `dims`, or `None` if unknown.  Exact
    dimensional matches are tried first, followed by dimensions that
    are proportional to one of the identifying units.
    """
    candidates = []
    for ref_type, texts in _REF_TYPE_UNITS:
        for text in texts:
            candidates.append((ref_type,
                               registry.expand_text(text, strict=False)[0]))

    for ref_type, other in candidates:
        if dims == other:
            return ref_type

    for ref_type, other in candidates:
        if all(other.exp(axis) == exp for axis, exp in dims.items()):
            return ref_type

    return None


# -- Private Functions -------------------------------------------------

def _level_conversion(kind: str, ref: float, ref_type: str) -> General:
    # Functions give the value in reference units.
    if kind == 'log':
        if ref_type == ROOT_POWER:
            return General(lambda x: ref * np.power(10.0, x / 2),
                           lambda x: 2 * np.log10(x / ref))
        return General(lambda x: ref * np.power(10.0, x),
                       lambda x: np.log10(x / ref))

    if ref_type == ROOT_POWER:
        return General(lambda x: ref * np.exp(x),
                       lambda x: np.log(x / ref))
    return General(lambda x: ref * np.exp(2 * x),
                   lambda x: 0.5 * np.log(x / ref))
