"""
Simplification of unit expressions to the most compact equivalent
expression drawn from the registered reference units.

The search is an iterative deepening over the number of distinct unit
symbols used.  For each budget every combination of reference units and
integer powers that exactly reproduces the target dimensions is found,
then only those that also reproduce the scale (directly, or with one
prefix on one term) are kept.  The smallest budget giving any result
ends the search.  Of those results, all having the lowest total power
(and then the fewest negative powers) are returned.  Where these need a
prefix, forms reusing units of the original expression are preferred.
As this search is expensive, results are cached.
"""
from __future__ import annotations

import threading
import warnings
from fractions import Fraction
from itertools import combinations, product
from typing import Hashable, Optional

import numpy as np

from ._convfn import Affine, Multiplicative
from ._dims import BASE_AXES, DimVector
from ._opts import UnitOptions, get_unit_options
from ._parse import UnitExpr, parse, term_text, tokenize
from ._registry import Registry, get_registry
from ._resolve import resolve_expression, to_base_symbols
from ._unitdef import PrefixDef, UnitDef
from pyunitex.containers import WriteOnceDict

# Written by Eric J. Whitney, January 2020.

# ======================================================================


class SimplifyCache:
    """
    Thread-safe store of simplification results.  Entries are never
    replaced once stored, so that every caller sees the same result for
    a given key even if several threads computed it at the same time.

    Attributes
    ----------
    hits, misses : int
        Number of ``get()`` calls that found / did not find an entry.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._store = WriteOnceDict()
        self.hits = 0
        self.misses = 0

    def get(self, key: Hashable) -> Optional[tuple[str, ...]]:
        with self._lock:
            result = self._store.get(key)
            if result is None:
                self.misses += 1
            else:
                self.hits += 1
            return result

    def insert_if_absent(self, key: Hashable, value: tuple[str, ...]
                         ) -> tuple[str, ...]:
        """
        Store `value` unless `key` already has an entry.  Returns the
        stored entry.
        """
        with self._lock:
            return self._store.setdefault(key, value)

    def clear(self):
        """Remove all entries and reset the counters."""
        with self._lock:
            self._store.clear()
            self.hits, self.misses = 0, 0

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._store

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)


_DEFAULT = object()
_default_cache = SimplifyCache()


def get_simplify_cache() -> SimplifyCache:
    """Returns the process-wide simplification cache."""
    return _default_cache


# ----------------------------------------------------------------------

def simplify(units: str | UnitExpr, registry: Registry = None,
             cache: Optional[SimplifyCache] = _DEFAULT) -> tuple[str, ...]:
    """
    Find the simplest equivalent forms of unit expression `units`.

    Parameters
    ----------
    units : str or UnitExpr
        Unit expression to simplify.
    registry : Registry, optional
        Registry to use, default is the process-wide registry.
    cache : SimplifyCache or None, optional
        Cache for results.  If omitted, the process-wide cache is used
        when option ``cache_simplified`` is set.  If `None` no cache is
        used.

    Returns
    -------
    tuple[str, ...]
        Sorted equivalent expressions, all having the smallest number of
        distinct unit symbols found.  Unknown symbols are kept as given
        at the end of each expression.  If no form reproduces the value
        of `units` exactly, a warning is issued and the original
        expression is returned.  Units with an offset or non-linear
        conversion are only simplified to a single reference unit of
        the same kind, otherwise the original expression is returned.

    Examples
    --------
    >>> simplify('kg m s^-2')
    ('N',)
    >>> simplify('s^-1')
    ('Bq', 'Hz')
    >>> simplify('km^2 m^-1 foo')
    ('km foo',)
    >>> simplify('A^-2 A^2')
    ('',)
    """
    if registry is None:
        registry = get_registry()
    opts = get_unit_options()
    cache = _select_cache(cache, opts)

    expr = parse(units, registry)
    dims, conv = resolve_expression(expr, registry)
    if isinstance(conv, Multiplicative):
        detail = ('mult', _normalise(conv.factor))
    elif isinstance(conv, Affine):
        detail = ('affine', _normalise(conv.factor), _normalise(conv.offset))
    else:
        detail = ('general', str(expr))

    key = _cache_key(registry, opts, dims, detail)
    result = cache.get(key) if cache is not None else None
    if result is None:
        if isinstance(conv, Multiplicative):
            result = _simplify_mult(dims, conv.factor, registry, opts)
        elif isinstance(conv, Affine):
            result = _simplify_affine(dims, conv, registry, opts)
        else:
            result = (str(expr),)

        if cache is not None:
            result = cache.insert_if_absent(key, result)

    if not result:
        if isinstance(conv, Multiplicative):
            warnings.warn(f"No simpler form of '{expr}' reproduces its "
                          f"scale, keeping original.")
        return str(expr),
    if isinstance(conv, Multiplicative):
        return _prefer_original(result, expr, registry)
    return result


def simplify_dims(dims: DimVector, scale: float = 1.0,
                  registry: Registry = None,
                  cache: Optional[SimplifyCache] = _DEFAULT
                  ) -> tuple[str, ...]:
    """
    Find the simplest unit expressions having dimensions `dims` where one
    unit of the expression is `scale` base units.  This is the same as
    ``simplify()`` except that if no expression reproduces `scale` a
    warning is issued and the base unit form (scale = 1) is returned.

    Examples
    --------
    >>> from pyunitex.units import DimVector
    >>> simplify_dims(DimVector.of(M=1, L=2, T=-2), 1e3)
    ('kJ',)
    """
    if registry is None:
        registry = get_registry()
    opts = get_unit_options()
    cache = _select_cache(cache, opts)

    key = _cache_key(registry, opts, dims, ('mult', _normalise(scale)))
    result = cache.get(key) if cache is not None else None
    if result is None:
        result = _simplify_mult(dims, scale, registry, opts)
        if cache is not None:
            result = cache.insert_if_absent(key, result)

    if not result:
        base_text = to_base_symbols(dims, registry, opts.unicode_str)
        warnings.warn(f"No unit with dimensions '{dims}' has scale "
                      f"{scale}, using '{base_text}'.")
        return base_text,
    return result


# -- Private Functions -------------------------------------------------

def _cache_key(registry: Registry, opts: UnitOptions, dims: DimVector,
               detail: tuple) -> tuple:
    return (registry.serial, registry.revision, opts.unicode_str,
            opts.simplify_max_symbols, opts.simplify_max_power,
            opts.rel_tol, dims, detail)


def _compose(term_lists, dims: DimVector, unicode: bool,
             reorder: bool = True) -> tuple[str, ...]:
    # Make the final sorted expressions, with unknowns at the end.
    unknown_parts = [term_text(str(axis), exp, unicode)
                     for axis, exp in dims.unknowns()]
    texts = set()
    for terms in term_lists:
        if reorder:
            terms = sorted(terms, key=lambda x: _symbol_order(x[0]))
        parts = [term_text(sym, Fraction(exp), unicode) for sym, exp in terms]
        texts.add(' '.join(parts + unknown_parts))
    return tuple(sorted(texts))


def _find_prefix(defn: UnitDef, exp, target: float, registry: Registry,
                 rel_tol: float) -> Optional[PrefixDef]:
    # Prefix for `defn` where prefix ** exp == target.
    for prefix in registry.prefixes():
        if defn.allows(prefix) and np.isclose(prefix.factor ** exp, target,
                                              rtol=rel_tol, atol=0):
            return prefix
    return None


def _normalise(x: float) -> float:
    return float(f'{x:.12g}')


def _power_score(terms) -> tuple[int, int]:
    return (sum(abs(p) for _, p in terms), sum(1 for _, p in terms if p < 0))


def _prefer_original(result: tuple[str, ...], expr: UnitExpr,
                     registry: Registry) -> tuple[str, ...]:
    # Of equally simple prefixed forms, keep those sharing the most units
    # with the original expression, e.g. 'mg' rather than 'nt'.
    if len(result) < 2:
        return result

    original = {t.unit.symbol for t in expr.terms if not t.is_unknown}
    counts = []
    for text in result:
        matches = [registry.resolve(sym) for sym, _ in tokenize(text)]
        matches = [m for m in matches if m is not None]
        if not any(m.prefix is not None for m in matches):
            return result
        counts.append(len(original & {m.unit.symbol for m in matches}))

    best = max(counts)
    if best == 0:
        return result
    return tuple(text for text, n in zip(result, counts) if n == best)


def _reference_vectors(registry: Registry):
    # Reference units usable in the search, with their dimensions and
    # factors.
    refs, vecs, factors = [], [], []
    for defn in registry.reference_units():
        dims, conv = registry.expand(defn)
        if dims.is_dimensionless() or not dims.is_integral():
            continue
        refs.append(defn)
        vecs.append(dims)
        factors.append(conv.factor)
    return refs, vecs, factors


def _search(target: DimVector, scale: float, registry: Registry,
            opts: UnitOptions) -> list[list[tuple[str, int]]]:
    refs, vecs, factors = _reference_vectors(registry)
    if not refs:
        return []

    extra_axes = {axis for v in vecs + [target] for axis, _ in v.extra}
    axes = list(BASE_AXES) + sorted(extra_axes, key=str)
    t = np.array([int(target.exp(a)) for a in axes], dtype=int)
    V = np.array([[int(v.exp(a)) for a in axes] for v in vecs], dtype=int)
    F = np.array(factors, dtype=float)
    powers = [p for p in range(-opts.simplify_max_power,
                               opts.simplify_max_power + 1) if p != 0]

    # Lookup of the single terms able to complete a covering.
    last_term = {}
    for u in range(len(refs)):
        for p in powers:
            last_term.setdefault(tuple(p * V[u]), []).append((u, p))

    for n_symbols in range(1, opts.simplify_max_symbols + 1):
        coverings = []
        if n_symbols == 1:
            for u, p in last_term.get(tuple(t), ()):
                coverings.append(((u,), (p,)))
        else:
            P = np.array(list(product(powers, repeat=n_symbols - 1)),
                         dtype=int)
            for combo in combinations(range(len(refs)), n_symbols - 1):
                residuals = t - P @ V[list(combo)]
                for ps, row in zip(P, residuals):
                    for u, p in last_term.get(tuple(row), ()):
                        if u > combo[-1]:
                            coverings.append((combo + (u,),
                                              tuple(int(x) for x in ps) +
                                              (p,)))

        if coverings:
            found = _fit_scale(coverings, scale, refs, F, registry,
                               opts.rel_tol)
            if found:
                return found

    return []


def _fit_scale(coverings, scale: float, refs: list[UnitDef], F: np.ndarray,
               registry: Registry, rel_tol: float
               ) -> list[list[tuple[str, int]]]:
    # Keep coverings that give `scale` exactly, or failing that those
    # made exact by one prefix on one term.
    exact, prefixed = [], []
    for units, powers in coverings:
        f = float(np.prod(F[list(units)] ** np.array(powers, dtype=float)))
        terms = [(refs[u].symbol, p) for u, p in zip(units, powers)]
        if np.isclose(f, scale, rtol=rel_tol, atol=0):
            exact.append(terms)
            continue

        for i, (u, p) in enumerate(zip(units, powers)):
            prefix = _find_prefix(refs[u], p, scale / f, registry, rel_tol)
            if prefix is not None:
                with_prefix = list(terms)
                with_prefix[i] = (prefix.symbol + refs[u].symbol, p)
                prefixed.append(with_prefix)

    # Lowest powers win, then fewest negative powers.
    found = exact or prefixed
    if not found:
        return []
    scores = [_power_score(terms) for terms in found]
    best = min(scores)
    return [terms for terms, score in zip(found, scores) if score == best]


def _base_form(target: DimVector, scale: float, registry: Registry,
               rel_tol: float) -> list[list[tuple[str, Fraction]]]:
    # Base units in axis order, with a prefix on one term if required.
    terms, defns = [], []
    for axis, exp in target.items():
        symbol = registry.base_symbol(axis)
        match = registry.resolve(symbol) if symbol else None
        terms.append((symbol or str(axis), exp))
        defns.append(match.unit if match else None)

    if np.isclose(scale, 1.0, rtol=rel_tol, atol=0):
        return [terms]

    for i, (defn, (symbol, exp)) in enumerate(zip(defns, terms)):
        if defn is None:
            continue
        prefix = _find_prefix(defn, exp, scale, registry, rel_tol)
        if prefix is not None:
            terms[i] = (prefix.symbol + symbol, exp)
            return [terms]

    return []


def _select_cache(cache, opts: UnitOptions) -> Optional[SimplifyCache]:
    if cache is _DEFAULT:
        return _default_cache if opts.cache_simplified else None
    return cache


def _simplify_affine(dims: DimVector, conv: Affine, registry: Registry,
                     opts: UnitOptions) -> tuple[str, ...]:
    known, found = dims.known(), []
    for defn in registry.units():
        if not defn.reference:
            continue
        ref_dims, ref_conv = registry.expand(defn)
        if not isinstance(ref_conv, Affine) or ref_dims != known:
            continue
        if not np.isclose(ref_conv.offset, conv.offset, rtol=opts.rel_tol,
                          atol=0):
            continue

        if np.isclose(ref_conv.factor, conv.factor, rtol=opts.rel_tol,
                      atol=0):
            found.append([(defn.symbol, 1)])
            continue
        prefix = _find_prefix(defn, 1, conv.factor / ref_conv.factor,
                              registry, opts.rel_tol)
        if prefix is not None:
            found.append([(prefix.symbol + defn.symbol, 1)])

    return _compose(found, dims, opts.unicode_str)


def _simplify_mult(dims: DimVector, scale: float, registry: Registry,
                   opts: UnitOptions) -> tuple[str, ...]:
    known = dims.known()
    if known.is_dimensionless():
        if np.isclose(scale, 1.0, rtol=opts.rel_tol, atol=0):
            return _compose([[]], dims, opts.unicode_str)
        return ()

    found = []
    if known.is_integral():
        found = _search(known, scale, registry, opts)
    if found:
        return _compose(found, dims, opts.unicode_str)

    found = _base_form(known, scale, registry, opts.rel_tol)
    return _compose(found, dims, opts.unicode_str, reorder=False)


def _symbol_order(symbol: str) -> tuple[bool, int, str]:
    # Symbols containing uppercase first, then shorter, then by text.
    return not any(c.isupper() for c in symbol), len(symbol), symbol
