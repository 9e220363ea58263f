"""
Units (:mod:`pyunitex.units`)
=============================

.. currentmodule:: pyunitex.units

Parsing, conversion and simplification of physical unit expressions.

Unit expressions are written as a flat, whitespace separated product of
unit symbols, each optionally raised to an integer or rational power,
e.g. ``'kg m^2 s^-2'``, ``'Pa^1/2'`` or ``'m²'``.  Symbols may carry a
prefix (``'km'``, ``'μs'``, ``'KiB'``) if the unit allows it.

Examples
--------

The ``convert`` function converts numeric values (or numpy arrays)
between any two expressions with the same dimensions.  Note that we try
to preserve the type of the input argument where possible (int to int,
float to float, etc):

>>> convert(3, 'MN m', 'mJ')
3000000000
>>> round(convert(1, 'pc', 'ly'), 6)
3.261564

Mismatched dimensions are an error:

>>> convert(1, 'm', 'A')  # doctest: +IGNORE_EXCEPTION_DETAIL
Traceback (most recent call last):
...
pyunitex.units._errors.IncompatibleDimensions: Cannot convert 'm' (L) -> 'A' (I).

Symbols that are not registered are not an error.  Each one is treated
as its own independent dimension, so that it passes unchanged through a
conversion when it appears identically on both sides:

>>> convert(3, 'm foo', 'km foo')
0.003

Temperature scales with an offset zero (°C, °F) are converted
correctly, however such units may only appear once in an expression and
can't be raised to a power.  Prefixes scale the value but never the
offset:

>>> round(convert(1, 'm°C', 'K'), 6)
273.151
>>> factor('K', '°C') is None  # No single factor exists.
True

The ``simplify`` function finds the most compact equivalent expressions
using named units.  All equally simple results are returned, sorted:

>>> simplify('kg^3 m^4 s^-6 A^-1')
('J^2 T', 'N^2 Wb')
>>> simplify('nm')
('nm',)

Logarithmic level units are written ``log(re <value> <units>)`` (bel)
or ``ln(re <value> <units>)`` (neper) and accept SI prefixes:

>>> print(round(convert(20.0, 'dlog(re 1 mW)', 'mW'), 6))
100.0

Custom units and prefixes can be added to the default registry:

>>> register_unit(UnitDef(symbols=('furlong',), basis='yd',
...                       conv=Multiplicative(220), reference=False))
>>> round(convert(1, 'furlong', 'm'), 4)
201.168
"""

from ._convfn import Affine, General, Multiplicative, ConversionFunction
from ._defs import (DEFAULT_CATALOGS, SI_BASE, SI_DERIVED, SI_COMMON,
                    BINARY, LEVEL, IMPERIAL)
from ._dims import BASE_AXES, DimVector, UnknownAxis
from ._errors import (DefinitionError, DuplicateSymbol, FormatError,
                      IncompatibleDimensions)
from ._level import POWER, ROOT_POWER, level_symbol, level_unit
from ._opts import UnitOptions, get_unit_options, set_unit_options
from ._parse import Term, UnitExpr, parse
from ._registry import (Registry, get_registry, set_registry,
                        register_prefix, register_unit)
from ._resolve import (Resolved, convert, convertible, equivalent, factor,
                       is_valid, proportional, resolve_expression,
                       to_base_symbols)
from ._simplify import (SimplifyCache, get_simplify_cache, simplify,
                        simplify_dims)
from ._unitdef import Catalog, Match, PrefixDef, UnitDef
