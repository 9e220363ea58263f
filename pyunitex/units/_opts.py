from __future__ import annotations

from dataclasses import dataclass, replace

# Written by Eric J. Whitney, January 2020.

# ======================================================================


@dataclass(frozen=True, kw_only=True)
class UnitOptions:
    """
    Dataclass that holds option flags for handling units.  See
    'get_unit_options' and  'set_unit_options' for full details.
    """
    cache_simplified: bool
    rel_tol: float
    simplify_max_symbols: int
    simplify_max_power: int
    unicode_str: bool
    warn_unknown: bool

    def __post_init__(self):
        """Check certain values"""
        if not (0 < self.rel_tol < 1):
            raise ValueError("Require 0 < 'rel_tol' < 1.")
        if self.simplify_max_symbols < 1:
            raise ValueError("Require 'simplify_max_symbols' >= 1.")
        if self.simplify_max_power < 1:
            raise ValueError("Require 'simplify_max_power' >= 1.")


# Create single instance and set defaults.
_unit_options = UnitOptions(
    cache_simplified=True,
    rel_tol=1e-9,
    simplify_max_symbols=3,
    simplify_max_power=4,
    unicode_str=False,
    warn_unknown=False
)


# ----------------------------------------------------------------------

def get_unit_options() -> UnitOptions:
    """
    Returns
    -------
    unit_options : UnitOptions
        Returns a UnitOptions object containing the options.  For a
        full description of each option, see `set_unit_options`.
    """
    return replace(_unit_options)


# noinspection PyIncorrectDocstring
def set_unit_options(**kwargs):
    """
    Set the current unit options.

    Parameters
    ----------
    cache_simplified : bool, default = True
        If `True`, results of ``simplify()`` are stored in the default
        process-wide cache (unless a cache is passed explicitly).

        .. note:: There is presently no size limit on this cache. This
           is normally not a problem as only a few kinds of quantity
           are simplified in any application.

    rel_tol : float, default = 1e-9
        Relative tolerance used when comparing conversion factors
        during simplification and when checking equivalence.

    simplify_max_symbols : int, default = 3
        Largest number of distinct named units tried when simplifying.
        The search cost grows very quickly with this value.

    simplify_max_power : int, default = 4
        Largest exponent magnitude (positive or negative) tried for
        each named unit when simplifying.

    unicode_str : bool, default = False
        Generate unicode characters for integer superscripts in
        generated unit text (e.g. ``m²`` instead of ``m^2``).  Both
        forms are accepted by the parser.

    warn_unknown : bool, default = False
        Issue a warning whenever the parser meets a symbol that is not
        registered (it is still treated as its own opaque dimension).

    See Also
    --------
    get_unit_options

    Examples
    --------
    >>> from pyunitex.units import simplify, set_unit_options
    >>> simplify('m m')
    ('m^2',)

    With unicode enabled the square is shown with a superscript:
    >>> set_unit_options(unicode_str=True)
    >>> simplify('m m', cache=None)
    ('m²',)
    >>> set_unit_options(unicode_str=False)
    """
    global _unit_options
    _unit_options = replace(_unit_options, **kwargs)
