import pytest

from pyunitex.units import get_registry


def _all_symbols():
    return [s for defn in get_registry().units() for s in defn.symbols]


# ----------------------------------------------------------------------

@pytest.mark.parametrize('symbol', _all_symbols())
def test_catalog_round_trip(symbol):
    from pyunitex.units import (convert, factor, resolve_expression,
                                Multiplicative)

    if not isinstance(resolve_expression(symbol).conv, Multiplicative):
        assert factor(symbol, symbol) is None
    back = convert(convert(1.5, symbol, symbol), symbol, symbol)
    assert back == pytest.approx(1.5)


@pytest.mark.parametrize('symbol', _all_symbols())
def test_catalog_base_units(symbol):
    from pyunitex.units import convertible, to_base_symbols

    reg = get_registry()
    defn = reg.resolve(symbol).unit
    assert convertible(symbol, to_base_symbols(reg.base_units_of(defn)))


@pytest.mark.parametrize('symbol', ['ft', 'lbf', 'psi', 'Btu', 'hp', 'kt',
                                    'RPM', '°F', 'Imp_gal', 'inHg'])
def test_catalog_imperial_not_reference(symbol):
    reg = get_registry()
    defn = reg.resolve(symbol).unit
    assert not defn.reference
    assert defn not in reg.reference_units()


def test_catalog_knot():
    from pyunitex.units import convert
    # Unprefixed 'kt' is the knot, not the kilotonne.
    assert convert(1, 'kt', 'km h^-1') == pytest.approx(1.852)
