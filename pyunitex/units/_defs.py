"""
Standard unit catalogs.  These are plain data;  ``DEFAULT_CATALOGS``
gives the order they are loaded into the default registry, where earlier
catalogs take priority if a symbol is defined more than once.
"""
import math

from ._convfn import Multiplicative, Affine
from ._unitdef import UnitDef, PrefixDef, Catalog

# Written by Eric J. Whitney, January 2020.

# ======================================================================

_SI = frozenset({'SI'})
_SI_BIN = frozenset({'SI', 'binary'})


def _unit(symbols, basis='', factor=1.0, *, prefixes=frozenset(),
          reference=True, name='') -> UnitDef:
    if isinstance(symbols, str):
        symbols = (symbols,)
    return UnitDef(symbols=symbols, basis=basis,
                   conv=Multiplicative(factor), prefixes=prefixes,
                   reference=reference, name=name)


def _base(symbol, axis, *, prefixes=_SI, name='') -> UnitDef:
    return UnitDef(symbols=(symbol,), axis=axis, prefixes=prefixes,
                   name=name)


# == SI Base Units =====================================================

SI_PREFIXES = (
    PrefixDef(symbols=('y',), factor=1e-24, name='yocto'),
    PrefixDef(symbols=('z',), factor=1e-21, name='zepto'),
    PrefixDef(symbols=('a',), factor=1e-18, name='atto'),
    PrefixDef(symbols=('f',), factor=1e-15, name='femto'),
    PrefixDef(symbols=('p',), factor=1e-12, name='pico'),
    PrefixDef(symbols=('n',), factor=1e-9, name='nano'),
    PrefixDef(symbols=('μ', 'µ', 'u'), factor=1e-6, name='micro'),
    PrefixDef(symbols=('m',), factor=1e-3, name='milli'),
    PrefixDef(symbols=('c',), factor=1e-2, name='centi'),
    PrefixDef(symbols=('d',), factor=1e-1, name='deci'),
    PrefixDef(symbols=('da',), factor=1e1, name='deca'),
    PrefixDef(symbols=('h',), factor=1e2, name='hecto'),
    PrefixDef(symbols=('k',), factor=1e3, name='kilo'),
    PrefixDef(symbols=('M',), factor=1e6, name='mega'),
    PrefixDef(symbols=('G',), factor=1e9, name='giga'),
    PrefixDef(symbols=('T',), factor=1e12, name='tera'),
    PrefixDef(symbols=('P',), factor=1e15, name='peta'),
    PrefixDef(symbols=('E',), factor=1e18, name='exa'),
    PrefixDef(symbols=('Z',), factor=1e21, name='zetta'),
    PrefixDef(symbols=('Y',), factor=1e24, name='yotta'),
)

SI_BASE = Catalog('SI base', units=(
    # The kilogram is the base unit of mass, so prefixes are applied to
    # the gram instead.
    _base('kg', 'M', prefixes=frozenset(), name='kilogram'),
    _unit('g', 'kg', 1e-3, prefixes=_SI, name='gram'),
    _base('m', 'L', name='metre'),
    _base('s', 'T', name='second'),
    _base('K', 'θ', name='kelvin'),
    _base('mol', 'N', name='mole'),
    _base('A', 'I', name='ampere'),
    _base('cd', 'J', name='candela'),
), prefixes=SI_PREFIXES)

# == SI Derived Units ==================================================

SI_DERIVED = Catalog('SI derived', units=(
    # -- Dimensionless -------------------------------------------------
    _unit('rad', prefixes=_SI, reference=False, name='radian'),
    _unit('sr', prefixes=_SI, reference=False, name='steradian'),

    # -- Mechanical ----------------------------------------------------
    _unit('Hz', 's^-1', prefixes=_SI, name='hertz'),
    _unit('N', 'kg m s^-2', prefixes=_SI, name='newton'),
    _unit('Pa', 'N m^-2', prefixes=_SI, name='pascal'),
    _unit('J', 'N m', prefixes=_SI, name='joule'),
    _unit('W', 'J s^-1', prefixes=_SI, name='watt'),

    # -- Electromagnetic -----------------------------------------------
    _unit('C', 'A s', prefixes=_SI, name='coulomb'),
    _unit('V', 'W A^-1', prefixes=_SI, name='volt'),
    _unit('F', 'C V^-1', prefixes=_SI, name='farad'),
    _unit(('Ω', 'Ohm', 'ohm'), 'V A^-1', prefixes=_SI, name='ohm'),
    _unit(('S', '℧', 'mho'), 'A V^-1', prefixes=_SI, name='siemens'),
    _unit('Wb', 'V s', prefixes=_SI, name='weber'),
    _unit('T', 'Wb m^-2', prefixes=_SI, name='tesla'),
    _unit('H', 'Wb A^-1', prefixes=_SI, name='henry'),

    # -- Temperature ---------------------------------------------------
    # Prefixes scale the Celsius value only, e.g. 1 m°C = 273.151 K.
    UnitDef(symbols=('°C',), basis='K', conv=Affine(1.0, 273.15),
            prefixes=_SI, name='degree Celsius'),

    # -- Photometric ---------------------------------------------------
    # Lumen is dimensionally identical to the candela.
    _unit('lm', 'cd sr', prefixes=_SI, reference=False, name='lumen'),
    _unit('lx', 'lm m^-2', prefixes=_SI, name='lux'),

    # -- Radiation and Chemistry ---------------------------------------
    _unit('Bq', 's^-1', prefixes=_SI, name='becquerel'),
    _unit('Gy', 'J kg^-1', prefixes=_SI, name='gray'),
    _unit('Sv', 'J kg^-1', prefixes=_SI, name='sievert'),
    _unit('kat', 'mol s^-1', prefixes=_SI, name='katal'),
))

# == SI Common Units ===================================================

# Units accepted for use with the SI.

_AU = 149597870700  # Metres, IAU 2012 Resolution B2.

SI_COMMON = Catalog('SI common', units=(
    # -- Time ----------------------------------------------------------
    _unit('min', 's', 60, name='minute'),
    _unit('h', 's', 3600, name='hour'),
    _unit('d', 's', 86400, name='day'),
    _unit('yr', 's', 31557600, prefixes=_SI, name='julian year'),

    # -- Length --------------------------------------------------------
    _unit('au', 'm', _AU, reference=False, name='astronomical unit'),
    _unit('pc', 'au', 648000 / math.pi, prefixes=_SI, reference=False,
          name='parsec'),
    _unit('ly', 'm', 9460730472580800, prefixes=_SI, reference=False,
          name='light-year'),
    _unit(('Å', 'ångström', 'angstrom', 'Angstrom'), 'm', 1e-10,
          reference=False, name='ångström'),

    # -- Plane Angle ---------------------------------------------------
    _unit('°', '', math.pi / 180, reference=False, name='degree'),
    _unit("'", '', math.pi / 10800, reference=False, name='arcminute'),
    _unit("''", '', math.pi / 648000, reference=False, name='arcsecond'),

    # -- Area and Volume -----------------------------------------------
    _unit(('ha', 'hectare'), 'm^2', 1e4, reference=False, name='hectare'),
    _unit(('l', 'L'), 'm^3', 1e-3, prefixes=_SI, name='litre'),

    # -- Mass ----------------------------------------------------------
    _unit('t', 'kg', 1e3, prefixes=_SI, name='tonne'),
    _unit('Da', 'kg', 1.6605390666e-27, prefixes=_SI, reference=False,
          name='dalton'),  # CODATA 2018.

    # -- Energy and Pressure -------------------------------------------
    _unit('eV', 'J', 1.602176634e-19, prefixes=_SI, name='electronvolt'),
    _unit('Wh', 'J', 3600, prefixes=_SI, reference=False,
          name='watt-hour'),
    _unit('bar', 'Pa', 1e5, prefixes=_SI, name='bar'),
))

# == Binary Units ======================================================

BINARY_PREFIXES = tuple(
    PrefixDef(symbols=(sym,), factor=2 ** (10 * (i + 1)), system='binary',
              name=name)
    for i, (sym, name) in enumerate((
        ('Ki', 'kibi'), ('Mi', 'mebi'), ('Gi', 'gibi'), ('Ti', 'tebi'),
        ('Pi', 'pebi'), ('Ei', 'exbi'), ('Zi', 'zebi'), ('Yi', 'yobi')))
)

BINARY = Catalog('binary', units=(
    _base('bit', 'bit', prefixes=_SI_BIN, name='bit'),
    _unit(('byte', 'o', 'octet'), 'bit', 8, prefixes=_SI_BIN,
          name='byte'),
), prefixes=BINARY_PREFIXES)

# == Level Units =======================================================

# Plain (unreferenced) logarithmic ratios.  Referenced levels such as
# 'dlog(re 1 mW)' are generated when parsed.

LEVEL = Catalog('level', units=(
    _base('Np', 'Np', name='neper'),
    _unit('B', 'Np', math.log(10) / 2, prefixes=_SI, reference=False,
          name='bel'),
))

# == Imperial & US Customary Units =====================================

# None of these are used when simplifying.

_G_FT = 9.80665 / 0.3048  # Standard gravity in ft/s^2 (WGS-84 defn).

IMPERIAL = Catalog('imperial', units=(
    # -- Length --------------------------------------------------------
    _unit('in', 'm', 0.0254, reference=False, name='inch'),
    _unit('ft', 'in', 12, reference=False, name='foot'),
    _unit('yd', 'ft', 3, reference=False, name='yard'),
    _unit('mi', 'yd', 1760, reference=False, name='mile'),
    _unit('rod', 'yd', 5.5, reference=False, name='rod'),
    _unit('NM', 'm', 1852, reference=False, name='nautical mile'),

    # US survey foot per National Bureau of Standards F.R. Doc.
    # 59-5442.  The statute mile is 5,280 of these.
    _unit('ft_US', 'm', 1200 / 3937, reference=False,
          name='US survey foot'),
    _unit('sm', 'ft_US', 5280, reference=False, name='statute mile'),

    # -- Mass and Force ------------------------------------------------
    _unit('lbm', 'kg', 0.45359237, reference=False, name='pound mass'),
    _unit('lbf', 'lbm ft s^-2', _G_FT, reference=False,
          name='pound force'),
    _unit('slug', 'lbf s^2 ft^-1', reference=False, name='slug'),
    _unit('kip', 'lbf', 1000, reference=False, name='kip'),
    _unit('kgf', 'kg m s^-2', 9.80665, reference=False,
          name='kilogram force'),

    # -- Pressure ------------------------------------------------------
    _unit('psi', 'lbf in^-2', reference=False, name='pound per sq. in'),
    _unit('ksi', 'psi', 1000, reference=False, name='kip per sq. in'),
    _unit('psf', 'lbf ft^-2', reference=False, name='pound per sq. ft'),
    _unit('atm', 'Pa', 101325, reference=False,
          name='standard atmosphere'),  # ISO 2533-1975
    _unit('Torr', 'atm', 1 / 760, reference=False, name='torr'),
    # BS 350: Part 1: 1974 – Conversion factors and tables.
    _unit('mmHg', 'Pa', 133.322387415, reference=False,
          name='millimetre of mercury'),
    _unit('inHg', 'mmHg', 25.4, reference=False, name='inch of mercury'),

    # -- Energy and Power ----------------------------------------------
    _unit('cal', 'J', 4.184, prefixes=_SI, reference=False,
          name='thermochemical calorie'),
    _unit('Btu', 'J', 1055.06, reference=False,
          name='British thermal unit'),  # ISO Btu.
    _unit('hp', 'ft lbf s^-1', 550, reference=False, name='horsepower'),

    # -- Volume --------------------------------------------------------
    _unit('US_gal', 'in^3', 231, reference=False, name='US gallon'),
    _unit('US_qt', 'US_gal', 0.25, reference=False, name='US quart'),
    _unit('Imp_gal', 'L', 4.54609, reference=False,
          name='imperial gallon'),

    # -- Speed ---------------------------------------------------------
    _unit('fps', 'ft s^-1', reference=False, name='foot per second'),
    _unit('kt', 'NM h^-1', reference=False, name='knot'),
    _unit('mph', 'sm h^-1', reference=False, name='mile per hour'),
    _unit('kph', 'km h^-1', reference=False, name='kilometre per hour'),

    # -- Angle and Rotation --------------------------------------------
    _unit('deg', '', math.pi / 180, reference=False, name='degree'),
    _unit('rev', '', 2 * math.pi, reference=False, name='revolution'),
    _unit('RPM', 'rev min^-1', reference=False,
          name='revolution per minute'),

    # -- Temperature ---------------------------------------------------
    # °F and °R scale to kelvin by 5/9.  Δ°C and Δ°F are temperature
    # differences that can be used in compound units.
    UnitDef(symbols=('°F',), basis='K', conv=Affine(5 / 9, 459.67 * 5 / 9),
            reference=False, name='degree Fahrenheit'),
    _unit('°R', 'K', 5 / 9, reference=False, name='degree Rankine'),
    _unit('Δ°C', 'K', reference=False, name='Celsius difference'),
    _unit('Δ°F', 'K', 5 / 9, reference=False,
          name='Fahrenheit difference'),
))

# ======================================================================

DEFAULT_CATALOGS = (SI_BASE, SI_DERIVED, SI_COMMON, BINARY, LEVEL,
                    IMPERIAL)
