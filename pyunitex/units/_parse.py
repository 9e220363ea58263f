"""
Parsing of unit expressions into terms.

A unit expression is a flat, whitespace separated product of unit
symbols, each optionally raised to a rational power, e.g. ``'kg m^2
s^-2'``, ``'Pa^1/2'`` or ``'m²'``.  Parsing never fails: any token that
cannot be matched to a registered unit is kept as an unknown literal and
carries its own opaque dimension.
"""
from __future__ import annotations

import re
import warnings
from fractions import Fraction
from typing import NamedTuple, Optional

from ._errors import FormatError
from ._opts import get_unit_options
from ._unitdef import UnitDef, PrefixDef

# Written by Eric J. Whitney, January 2020.

# ======================================================================

# Tokens are separated by whitespace, except inside a single set of
# parentheses, e.g. 'dlog(re 1 mW)'.
_TOKEN_RX = re.compile(r'\S*?\([^()]*\)\S*|\S+')
_PAREN_RX = re.compile(r'\([^()]*\)')

_ASCII_EXP_RX = re.compile(r'(.+)\^([+-]?\d+(?:/\d+)?)')

_UCODE_SS_CHARS = ('⁺⁻ᐧ⁰¹²³⁴⁵⁶⁷⁸⁹', '+-.0123456789')
_UC_SGN = _UCODE_SS_CHARS[0][0:2]
_UC_DOT = _UCODE_SS_CHARS[0][2]
_UC_DIG = _UCODE_SS_CHARS[0][3:]
_UCODE_EXP_RX = re.compile(
    fr'(.+?)([{_UC_SGN}]?[{_UC_DIG}]+(?:[{_UC_DOT}][{_UC_DIG}]+)?)')

_ONE = Fraction(1)


# ----------------------------------------------------------------------

class Term(NamedTuple):
    """
    A single parsed term of a unit expression.

    Attributes
    ----------
    symbol : str
        Text of the term without its exponent, including any prefix
        (e.g. ``'km'``).  For a token that could not be parsed this is
        the complete raw token.
    exponent : Fraction
        Power the term is raised to.
    unit : UnitDef or None
        Matched unit definition, or `None` for an unknown literal.
    prefix : PrefixDef or None
        Prefix applied to `unit`, if any.
    prefix_text : str
        The prefix symbol exactly as written (may be an alias such as
        ``'u'`` for micro).
    """
    symbol: str
    exponent: Fraction = _ONE
    unit: Optional[UnitDef] = None
    prefix: Optional[PrefixDef] = None
    prefix_text: str = ''

    @property
    def is_unknown(self) -> bool:
        return self.unit is None

    def __str__(self):
        return term_text(self.symbol, self.exponent)


class UnitExpr(NamedTuple):
    """
    Ordered terms of a parsed unit expression.  Order is only kept for
    display and does not affect any result.

    Examples
    --------
    >>> expr = parse('km^2 h^-1 foo')
    >>> [t.symbol for t in expr.terms]
    ['km', 'h', 'foo']
    >>> print(expr)
    km^2 h^-1 foo
    >>> [t.symbol for t in expr.unknowns()]
    ['foo']
    """
    terms: tuple[Term, ...] = ()

    def unknowns(self) -> tuple[Term, ...]:
        return tuple(t for t in self.terms if t.is_unknown)

    def __str__(self):
        return ' '.join(str(t) for t in self.terms)


# ----------------------------------------------------------------------

def parse(text: str | UnitExpr, registry=None) -> UnitExpr:
    """
    Parse unit expression `text` into a ``UnitExpr``.  This never
    raises on bad input.

    Each whitespace separated token is split into a symbol and an
    optional exponent (``^n``, ``^-n``, ``^a/b`` or unicode superscript
    digits).  The symbol is looked up in the registry as an unprefixed
    unit first, then by removing registered prefixes (longest first) and
    matching the remainder to a unit that accepts that prefix.  A symbol
    of the form ``log(re <value> <units>)`` or ``ln(re <value>
    <units>)`` is a level unit (see ``level_symbol()``).  Anything else
    becomes an unknown literal.

    Parameters
    ----------
    text : str or UnitExpr
        Unit expression.  A ``UnitExpr`` is returned unchanged.
    registry : Registry, optional
        Registry to look up symbols in, default is the process-wide
        registry.

    Returns
    -------
    UnitExpr

    Examples
    --------
    >>> expr = parse('mm^-1/2 s⁻¹')
    >>> [(t.symbol, str(t.exponent)) for t in expr.terms]
    [('mm', '-1/2'), ('s', '-1')]
    >>> expr.terms[0].prefix.factor
    0.001
    >>> parse('') == UnitExpr()
    True
    """
    if isinstance(text, UnitExpr):
        return text

    if registry is None:
        from ._registry import get_registry
        registry = get_registry()

    terms = []
    for token in _TOKEN_RX.findall(text):
        terms.append(_parse_token(token, registry))

    if get_unit_options().warn_unknown:
        for term in terms:
            if term.is_unknown:
                warnings.warn(f"Unknown unit '{term.symbol}' in '{text}'.")

    return UnitExpr(tuple(terms))


def tokenize(text: str) -> list[tuple[str, Fraction]]:
    """
    Split unit expression `text` into ``(symbol, exponent)`` pairs
    without looking up any symbols.

    Raises
    ------
    FormatError
        If any token has a malformed exponent.

    Examples
    --------
    >>> tokenize('kg m^2 s^-2')
    [('kg', Fraction(1, 1)), ('m', Fraction(2, 1)), ('s', Fraction(-2, 1))]
    """
    result = []
    for token in _TOKEN_RX.findall(text):
        symbol, exp = split_exponent(token)
        if exp is None:
            raise FormatError(f"Malformed exponent in '{token}' of unit "
                              f"expression '{text}'.")
        result.append((symbol, exp))
    return result


def split_exponent(token: str) -> tuple[str, Optional[Fraction]]:
    """
    Split a single token into its symbol and exponent.  If the exponent
    is malformed the token is returned whole with exponent `None`.

    Examples
    --------
    >>> split_exponent('m^-3')
    ('m', Fraction(-3, 1))
    >>> split_exponent('m⁰ᐧ⁵')
    ('m', Fraction(1, 2))
    >>> split_exponent('m^x')
    ('m^x', None)
    """
    if '^' in _PAREN_RX.sub('', token):
        match = _ASCII_EXP_RX.fullmatch(token)
        if not match:
            return token, None
        symbol, exp_str = match.groups()
        if '^' in _PAREN_RX.sub('', symbol):
            return token, None  # Repeated power e.g. 'm^2^3'.
        try:
            return symbol, Fraction(exp_str)
        except ZeroDivisionError:
            return token, None

    if token[-1] in _UCODE_SS_CHARS[0]:
        match = _UCODE_EXP_RX.fullmatch(token)
        if not match:
            return token, None
        symbol, exp_str = match.groups()
        return symbol, Fraction(_from_ucode_super(exp_str))

    return token, _ONE


def term_text(symbol: str, exponent: Fraction,
              unicode: bool = False) -> str:
    """
    Generate text for `symbol` raised to `exponent`.  If `unicode` is
    `True`, integer exponents are given as superscripts.

    Examples
    --------
    >>> term_text('s', Fraction(-2))
    's^-2'
    >>> term_text('s', Fraction(-2), unicode=True)
    's⁻²'
    >>> term_text('Hz', Fraction(1, 2), unicode=True)
    'Hz^1/2'
    """
    if exponent == 1:
        return symbol
    if unicode and exponent.denominator == 1:
        return symbol + _to_ucode_super(str(exponent))
    return f"{symbol}^{exponent}"


# -- Private Functions -------------------------------------------------

def _parse_token(token: str, registry) -> Term:
    from ._level import match_level

    symbol, exp = split_exponent(token)
    if exp is None:
        return Term(token)

    match = registry.resolve(symbol)
    if match is None:
        match = match_level(symbol, registry)
    if match is None:
        return Term(symbol, exp)

    return Term(symbol, exp, match.unit, match.prefix, match.prefix_text)


# -- Unicode Functions -------------------------------------------------

def _from_ucode_super(ss: str) -> str:
    """
    Convert any unicode numeric superscipt characters in the string
    ``ss`` to normal ascii text.
    """
    result = ''
    for c in ss:
        idx = _UCODE_SS_CHARS[0].find(c)
        if idx >= 0:
            result += _UCODE_SS_CHARS[1][idx]
        else:
            result += c
    return result


def _to_ucode_super(ss: str) -> str:
    """
    Convert numeric characters in the string ``ss`` to unicode
    superscript.
    """
    result = ''
    for c in ss:
        idx = _UCODE_SS_CHARS[1].find(c)
        if idx >= 0:
            result += _UCODE_SS_CHARS[0][idx]
        else:
            result += c
    return result
