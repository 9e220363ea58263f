"""
Registry of unit and prefix definitions.
"""
from __future__ import annotations

import itertools
import threading
from typing import Iterable, Optional

from ._convfn import ConversionFunction, Multiplicative, combine
from ._defs import DEFAULT_CATALOGS
from ._dims import DimVector, UnknownAxis
from ._errors import DefinitionError, DuplicateSymbol, FormatError
from ._parse import tokenize
from ._unitdef import Catalog, Match, PrefixDef, UnitDef, check_symbols
from pyunitex.containers import WriteOnceDict

# Written by Eric J. Whitney, January 2020.

# ======================================================================


class Registry:
    """
    A ``Registry`` holds the unit and prefix definitions from one or more
    catalogs and expands any of them to base units.

    Catalogs are loaded in order.  If a symbol is defined by more than
    one catalog the first definition is used and later ones are
    ignored, however a symbol used twice within the same catalog is an
    error.  Every definition is expanded when the registry is built, so
    that cyclic or otherwise broken definitions are found immediately.

    Parameters
    ----------
    catalogs : Iterable[Catalog]
        Catalogs to load, in priority order.

    Raises
    ------
    DuplicateSymbol
        If a symbol appears twice within a single catalog.
    DefinitionError
        If any unit can't be expanded to base units.

    Examples
    --------
    >>> from pyunitex.units import Catalog, UnitDef, Multiplicative
    >>> cat = Catalog('demo', units=(
    ...     UnitDef(symbols=('m',), axis='L'),
    ...     UnitDef(symbols=('ft',), basis='m', conv=Multiplicative(0.3048))))
    >>> reg = Registry([cat])
    >>> dims, conv = reg.expand(reg.resolve('ft').unit)
    >>> print(dims, conv.factor)
    L 0.3048
    """

    _serials = itertools.count()

    def __init__(self, catalogs: Iterable[Catalog] = ()):
        self._units: dict[str, UnitDef] = {}
        self._prefixes: dict[str, PrefixDef] = {}
        self._unit_defs: list[UnitDef] = []
        self._prefix_defs: list[PrefixDef] = []
        self._prefix_order: tuple[str, ...] = ()
        self._base_units: dict[str, UnitDef] = {}
        self._expanded = {}  # {id(defn): (defn, dims, conv), ...}
        self._text_memo = {}
        self._ref_units = None
        self._revision = 0
        self._serial = next(Registry._serials)

        for catalog in catalogs:
            self._load(catalog)
        self._update_prefix_order()

        for defn in self._unit_defs:
            self.expand(defn)

    # -- Properties ----------------------------------------------------

    @property
    def serial(self) -> int:
        """Number identifying this registry, never reused in a process."""
        return self._serial

    @property
    def revision(self) -> int:
        """Incremented whenever a unit or prefix is registered."""
        return self._revision

    # -- Lookup --------------------------------------------------------

    def resolve(self, symbol: str) -> Optional[Match]:
        """
        Look up `symbol`, which may include a prefix.  An exact
        (unprefixed) match is always preferred.  Otherwise prefixes are
        tried longest first and the remainder must be an unprefixed unit
        that accepts that prefix.

        Returns
        -------
        Match or None
            `None` if no unit matches.
        """
        unit = self._units.get(symbol)
        if unit is not None:
            return Match(unit)

        for prefix_text in self._prefix_order:
            if len(symbol) <= len(prefix_text):
                continue
            if not symbol.startswith(prefix_text):
                continue
            unit = self._units.get(symbol[len(prefix_text):])
            prefix = self._prefixes[prefix_text]
            if unit is not None and unit.allows(prefix):
                return Match(unit, prefix, prefix_text)

        return None

    def prefix(self, symbol: str) -> Optional[PrefixDef]:
        return self._prefixes.get(symbol)

    def units(self) -> tuple[UnitDef, ...]:
        """All unit definitions in registration order."""
        return tuple(self._unit_defs)

    def prefixes(self) -> tuple[PrefixDef, ...]:
        """All prefix definitions in registration order."""
        return tuple(self._prefix_defs)

    def reference_units(self) -> tuple[UnitDef, ...]:
        """
        Units that are candidates for simplification, i.e. flagged as
        `reference` and with a multiplicative conversion.
        """
        if self._ref_units is None:
            self._ref_units = tuple(
                d for d in self._unit_defs if d.reference and
                isinstance(self.expand(d)[1], Multiplicative))
        return self._ref_units

    def base_symbol(self, axis: str) -> Optional[str]:
        """Symbol of the base unit spanning `axis`, if any."""
        defn = self._base_units.get(axis)
        return defn.symbol if defn is not None else None

    # -- Expansion -----------------------------------------------------

    def expand(self, defn: UnitDef, strict: bool = True
               ) -> tuple[DimVector, ConversionFunction]:
        """
        Expand unit definition `defn` to base units.

        Parameters
        ----------
        defn : UnitDef
            Unit definition.  This does not need to be registered.
        strict : bool, default = True
            If `True` an unknown symbol in the basis of `defn` is an
            error, otherwise it is treated as its own dimension.

        Returns
        -------
        dims, conv : DimVector, ConversionFunction
            Dimensions of `defn` and conversion of a value in `defn`
            units to base units.

        Raises
        ------
        DefinitionError
            If the definition is cyclic, contains unknown symbols (if
            `strict`) or has a basis that is not multiplicative.
        """
        return self._expand(defn, strict, ())

    def base_units_of(self, defn: UnitDef) -> DimVector:
        """Dimensions of `defn` in base units."""
        return self.expand(defn)[0]

    def expand_text(self, text: str, strict: bool = True
                    ) -> tuple[DimVector, ConversionFunction]:
        """
        Expand unit expression `text` containing only registered unit
        symbols to base units.  If `strict` is `False`, unknown symbols
        are given their own dimension instead of raising
        ``DefinitionError``.

        Raises
        ------
        FormatError
            If `text` contains a malformed exponent or illegal
            combination of units.
        """
        key = (text, strict)
        result = self._text_memo.get(key)
        if result is None:
            result = self._expand_text(text, strict, ())
            self._text_memo[key] = result
        return result

    # -- Registration --------------------------------------------------

    def register_unit(self, defn: UnitDef):
        """
        Add unit `defn` to this registry.

        Raises
        ------
        DuplicateSymbol
            If any symbol of `defn` is already registered.
        DefinitionError
            If `defn` can't be expanded to base units.  The registry is
            left unchanged.
        """
        check_symbols(defn.symbols, 'unit')
        for symbol in defn.symbols:
            if symbol in self._units:
                raise DuplicateSymbol(f"Unit symbol '{symbol}' is already "
                                      f"registered.")

        for symbol in defn.symbols:
            self._units[symbol] = defn
        self._unit_defs.append(defn)
        try:
            self.expand(defn)
        except DefinitionError:
            for symbol in defn.symbols:
                del self._units[symbol]
            self._unit_defs.pop()
            self._expanded.pop(id(defn), None)
            raise

        if defn.axis is not None:
            self._base_units.setdefault(defn.axis, defn)
        self._changed()

    def register_prefix(self, prefix: PrefixDef):
        """
        Add `prefix` to this registry.

        Raises
        ------
        DuplicateSymbol
            If any symbol of `prefix` is already registered as a prefix.
        """
        for symbol in prefix.symbols:
            if symbol in self._prefixes:
                raise DuplicateSymbol(f"Prefix symbol '{symbol}' is already "
                                      f"registered.")
        for symbol in prefix.symbols:
            self._prefixes[symbol] = prefix
        self._prefix_defs.append(prefix)
        self._update_prefix_order()
        self._changed()

    # -- Private Methods -----------------------------------------------

    def _changed(self):
        self._revision += 1
        self._text_memo.clear()
        self._ref_units = None

    def _expand(self, defn: UnitDef, strict: bool, chain: tuple[str, ...]
                ) -> tuple[DimVector, ConversionFunction]:
        memo = self._expanded.get(id(defn))
        if memo is not None and memo[0] is defn:
            return memo[1], memo[2]

        if defn.symbol in chain:
            raise DefinitionError(
                f"Cyclic unit definition: "
                f"{' -> '.join(chain[chain.index(defn.symbol):])} -> "
                f"{defn.symbol}.")

        if defn.axis is not None:
            dims, conv = DimVector.of({defn.axis: 1}), defn.conv
        else:
            try:
                dims, base = self._expand_text(defn.basis, strict,
                                               chain + (defn.symbol,))
            except FormatError as e:
                raise DefinitionError(f"Invalid basis '{defn.basis}' for "
                                      f"unit '{defn.symbol}'.") from e

            if not isinstance(base, Multiplicative):
                raise DefinitionError(f"Basis '{defn.basis}' for unit "
                                      f"'{defn.symbol}' must be "
                                      f"multiplicative.")
            conv = defn.conv.then(base.factor)

        if self._is_registered(defn):
            self._expanded[id(defn)] = (defn, dims, conv)
        return dims, conv

    def _expand_text(self, text: str, strict: bool, chain: tuple[str, ...]
                     ) -> tuple[DimVector, ConversionFunction]:
        parts = []
        for symbol, exp in tokenize(text):
            match = self.resolve(symbol)
            if match is None:
                if strict:
                    raise DefinitionError(f"Unknown unit '{symbol}' in "
                                          f"'{text}'.")
                parts.append((DimVector.of({UnknownAxis(symbol): 1}),
                              Multiplicative(), exp, symbol))
                continue

            dims, conv = self._expand(match.unit, strict, chain)
            if match.prefix is not None:
                conv = conv.after(match.prefix.factor)
            parts.append((dims, conv, exp, symbol))

        return combine(parts)

    def _is_registered(self, defn: UnitDef) -> bool:
        return any(self._units.get(s) is defn for s in defn.symbols)

    def _load(self, catalog: Catalog):
        units, prefixes = WriteOnceDict(), WriteOnceDict()
        try:
            for defn in catalog.units:
                check_symbols(defn.symbols, 'unit')
                for symbol in defn.symbols:
                    units[symbol] = defn
            for prefix in catalog.prefixes:
                for symbol in prefix.symbols:
                    prefixes[symbol] = prefix
        except KeyError as e:
            raise DuplicateSymbol(f"Duplicate symbol in catalog "
                                  f"'{catalog.name}': {e}") from e

        # Earlier catalogs take priority.
        for symbol, defn in units.items():
            self._units.setdefault(symbol, defn)
        for symbol, prefix in prefixes.items():
            self._prefixes.setdefault(symbol, prefix)

        for defn in catalog.units:
            if self._is_registered(defn):
                self._unit_defs.append(defn)
                if defn.axis is not None:
                    self._base_units.setdefault(defn.axis, defn)
        for prefix in catalog.prefixes:
            if any(self._prefixes.get(s) is prefix for s in prefix.symbols):
                self._prefix_defs.append(prefix)

    def _update_prefix_order(self):
        self._prefix_order = tuple(sorted(self._prefixes,
                                          key=lambda s: (-len(s), s)))


# ======================================================================

_default_registry: Optional[Registry] = None
_default_lock = threading.Lock()


def get_registry() -> Registry:
    """
    Returns the process-wide default registry, building it from
    ``DEFAULT_CATALOGS`` on first use.
    """
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            _default_registry = Registry(DEFAULT_CATALOGS)
        return _default_registry


def set_registry(registry: Optional[Registry]):
    """
    Replace the process-wide default registry.  If `registry` is `None`
    the default is rebuilt on next use.
    """
    global _default_registry
    with _default_lock:
        _default_registry = registry


def register_unit(defn: UnitDef):
    """Add a unit to the default registry. See ``Registry.register_unit``."""
    get_registry().register_unit(defn)


def register_prefix(prefix: PrefixDef):
    """Add a prefix to the default registry. See
    ``Registry.register_prefix``."""
    get_registry().register_prefix(prefix)
