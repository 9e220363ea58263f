from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple, Optional

from ._convfn import ConversionFunction, Multiplicative

# Written by Eric J. Whitney, January 2020.

# ======================================================================

_RESERVED_CHARS = set("^()")


def check_symbols(symbols: tuple[str, ...], what: str):
    """
    Raise `ValueError` unless `symbols` are usable in unit expression
    text, i.e. non-empty strings without whitespace, powers or
    parentheses.
    """
    if not symbols:
        raise ValueError(f"At least one symbol is required for a {what}.")
    for s in symbols:
        if not isinstance(s, str) or not s:
            raise ValueError(f"Invalid {what} symbol: {s!r}.")
        if any(c.isspace() or c in _RESERVED_CHARS for c in s):
            raise ValueError(f"Invalid {what} symbol: '{s}'.")


# ----------------------------------------------------------------------

@dataclass(frozen=True, kw_only=True)
class UnitDef:
    """
    Definition of a named unit.

    Parameters
    ----------
    symbols : tuple[str, ...]
        Symbol and aliases, e.g. ``('Ω', 'Ohm', 'ohm')``.  The first is
        used when generating unit text.
    axis : str, optional
        If given, this is a base unit spanning this dimension axis, e.g.
        ``'L'`` for the metre.  Non-SI axis names (e.g. ``'bit'``) give
        extra dimensions.
    basis : str, default = ''
        Otherwise, an expression in other registered units that this
        unit is defined against, e.g. ``'kg m s^-2'``.  An empty basis
        (with no `axis`) is a dimensionless unit.
    conv : ConversionFunction, default = Multiplicative(1)
        Converts a value in this unit to a value in `basis` units.
    prefixes : frozenset[str], default = frozenset()
        Prefix systems (e.g. ``{'SI', 'binary'}``) allowed on this unit.
    reference : bool, default = True
        If `True` this unit is a candidate for ``simplify()``.
    name : str, optional
        Descriptive name.
    """
    symbols: tuple[str, ...]
    axis: Optional[str] = None
    basis: str = ''
    conv: ConversionFunction = field(default=Multiplicative())
    prefixes: frozenset[str] = frozenset()
    reference: bool = True
    name: str = ''

    def __post_init__(self):
        if isinstance(self.symbols, str):
            object.__setattr__(self, 'symbols', (self.symbols,))
        else:
            object.__setattr__(self, 'symbols', tuple(self.symbols))
        object.__setattr__(self, 'prefixes', frozenset(self.prefixes))

        if not self.symbols:
            raise ValueError("At least one symbol is required for a unit.")
        if self.axis is not None and self.basis:
            raise ValueError(f"Unit '{self.symbol}' can't have both an "
                             f"axis and a basis.")

    @property
    def symbol(self) -> str:
        """Primary symbol."""
        return self.symbols[0]

    def allows(self, prefix: PrefixDef) -> bool:
        return prefix.system in self.prefixes


@dataclass(frozen=True, kw_only=True)
class PrefixDef:
    """
    Definition of a unit prefix, e.g. ``PrefixDef(symbols=('k',),
    factor=1e3)``.  The prefix can be applied to any unit that lists
    `system` among its allowed prefixes.
    """
    symbols: tuple[str, ...]
    factor: float
    system: str = 'SI'
    name: str = ''

    def __post_init__(self):
        if isinstance(self.symbols, str):
            object.__setattr__(self, 'symbols', (self.symbols,))
        else:
            object.__setattr__(self, 'symbols', tuple(self.symbols))
        check_symbols(self.symbols, 'prefix')
        if self.factor <= 0:
            raise ValueError(f"Prefix '{self.symbol}' factor must be > 0.")

    @property
    def symbol(self) -> str:
        return self.symbols[0]


@dataclass(frozen=True)
class Catalog:
    """
    A named collection of unit and prefix definitions that can be
    loaded into a ``Registry``.
    """
    name: str
    units: tuple[UnitDef, ...] = ()
    prefixes: tuple[PrefixDef, ...] = ()


class Match(NamedTuple):
    """Result of looking up a (possibly prefixed) unit symbol."""
    unit: UnitDef
    prefix: Optional[PrefixDef] = None
    prefix_text: str = ''
