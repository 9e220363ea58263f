from unittest import TestCase

import pytest


# -- Conversion Values --------------------------------------------------

@pytest.mark.parametrize('value, from_units, to_units, expected', [
    (3, 'MN m', 'mJ', 3e9),
    (3, 'pc', 'Angstrom', 9.2570327444741e26),
    (1, 'pc', 'ly', 3.261563777167433),
    (0, '°C', 'K', 273.15),
    (3, 'nm', 'Angstrom', 30),
    (3, 'g', 'Mg', 3e-6),
    (3, '°C g kg', 'mK g^2', 2.7615e8),
    (8, 'bit V^-1', 'byte V^-1', 1),
    (1, 'm°C', 'K', 273.151),
    (3, 'K', '°C', -270.15),
    (3, 'mK', '°C', -273.147),
    (3, 'A ms', 'C', 0.003),
    (3, 'A s', 'C', 3),
    (100, '°C', '°F', 212),
    (32, '°F', '°C', 0),
    (1, 'Kibyte', 'bit', 8192),
    (1, 'km h^-1', 'm s^-1', 1 / 3.6),
    (1, 'ft', 'in', 12),
    (1, 'slug', 'lbm', 32.17404855643045),
    (1, 'Btu', 'ft lbf', 778.1723212164716),
    (1, 'atm', 'Torr', 760),
    (1, 'rev', '°', 360),
    (1, 'Pa^1/2', 'kPa^1/2', 1000 ** -0.5),
    (3, 'm^2 foo', 'mm^2 foo', 3e6),
])
def test_convert(value, from_units, to_units, expected):
    from pyunitex.units import convert
    assert convert(value, from_units, to_units) == pytest.approx(
        expected, rel=1e-9, abs=1e-9)


# ----------------------------------------------------------------------

class TestConvert(TestCase):
    def test_types(self):
        import numpy as np
        from pyunitex.units import convert

        # Test int is preserved where possible.
        x = convert(3, 'km', 'm')
        self.assertEqual(x, 3000)
        self.assertIsInstance(x, int)
        self.assertIsInstance(convert(3, 'm', 'km'), float)
        self.assertIsInstance(convert(3.0, 'km', 'm'), float)

        # Test arrays.
        x = convert(np.array([0.0, 100.0]), '°C', 'K')
        np.testing.assert_allclose(x, [273.15, 373.15])

    def test_incompatible(self):
        from pyunitex.units import convert, factor, IncompatibleDimensions

        with self.assertRaises(IncompatibleDimensions):
            convert(1, 'm', 'A')
        with self.assertRaises(IncompatibleDimensions):
            convert(1, 'foo', 'bar')
        with self.assertRaises(IncompatibleDimensions):
            convert(1, 'm^2 foo', 'm^2 foo^2')
        with self.assertRaises(IncompatibleDimensions):
            factor('kg', 'm')

        # Errors are also ValueErrors.
        with self.assertRaises(ValueError):
            convert(1, 's', 'kg')

    def test_format_errors(self):
        from pyunitex.units import convert, FormatError

        with self.assertRaises(FormatError):
            convert(1, '°C^2', 'K^2')
        with self.assertRaises(FormatError):
            convert(1, '°C °F', 'K^2')
        with self.assertRaises(FormatError):
            convert(1, 'm^x', 'm')
        with self.assertRaises(FormatError):
            convert(1, 'dlog(re 1 mW) s', 'W s')

    def test_factor(self):
        from pyunitex.units import factor

        self.assertAlmostEqual(factor('m', 'km'), 0.001)
        self.assertEqual(factor('kg', 't'), 1e-3)
        self.assertAlmostEqual(factor('in^2', 'mm^2'), 645.16)
        self.assertIsNone(factor('K', '°C'))
        self.assertIsNone(factor('°F', '°C'))
        self.assertIsNone(factor('log(re 1 mW)', 'mW'))

    def test_affine_combined(self):
        from pyunitex.units import convert

        # Offset is scaled along with the other units.
        self.assertAlmostEqual(convert(1, '°C m', 'K m'), 274.15)
        self.assertAlmostEqual(convert(1, '°C km', 'K m'), 274150)
        # Prefix scales the value only.
        self.assertAlmostEqual(convert(273.151, 'K', 'm°C'), 1.0, places=6)


class TestRelations(TestCase):
    def test_convertible(self):
        from pyunitex.units import convertible

        self.assertTrue(convertible('s', 'min'))
        self.assertTrue(convertible('J', 'N m'))
        self.assertTrue(convertible('°C', 'K'))
        self.assertTrue(convertible('m foo', 'km foo'))
        self.assertTrue(convertible('', 'rad'))
        self.assertFalse(convertible('J', 'W'))
        self.assertFalse(convertible('foo', 'bar'))

        # Reflexive, symmetric, transitive.
        units = ['J', 'N m', 'eV', 'kg m^2 s^-2', 'W s']
        for a in units:
            self.assertTrue(convertible(a, a))
            for b in units:
                self.assertEqual(convertible(a, b), convertible(b, a))
                for c in units:
                    if convertible(a, b) and convertible(b, c):
                        self.assertTrue(convertible(a, c))

    def test_equivalent(self):
        from pyunitex.units import equivalent

        self.assertFalse(equivalent(1, 's', 'min'))
        self.assertTrue(equivalent(1, 'J', 'N m'))
        self.assertTrue(equivalent(1, 'W s', 'J'))
        self.assertTrue(equivalent(0, 'K', 'K'))
        self.assertFalse(equivalent(1, 'K', '°C'))
        self.assertFalse(equivalent(1, 'J', 'W'))
        self.assertTrue(equivalent(5, 'Δ°C', 'K'))

    def test_proportional(self):
        from pyunitex.units import proportional

        self.assertTrue(proportional('W', 'W K^-2'))
        self.assertTrue(proportional('kg', 'J'))
        self.assertTrue(proportional('kg^2', 'J^2'))
        self.assertFalse(proportional('W', 'W m'))
        self.assertFalse(proportional('K', '°C'))

    def test_is_valid(self):
        from pyunitex.units import is_valid

        self.assertTrue(is_valid('kg m^2 s^-2'))
        self.assertTrue(is_valid('μm'))
        self.assertTrue(is_valid(''))
        self.assertTrue(is_valid('dlog(re 1 mW)'))
        self.assertFalse(is_valid('kg foo'))
        self.assertFalse(is_valid('m^x'))
        self.assertFalse(is_valid('°C^2'))

    def test_resolve_expression(self):
        from pyunitex.units import (resolve_expression, DimVector, Affine,
                                    Multiplicative)

        dims, conv = resolve_expression('kWh')
        self.assertEqual(dims, DimVector.of(M=1, L=2, T=-2))
        self.assertIsInstance(conv, Multiplicative)
        self.assertAlmostEqual(conv.factor, 3.6e6)

        dims, conv = resolve_expression('°F')
        self.assertIsInstance(conv, Affine)
        self.assertAlmostEqual(conv.to_base(32), 273.15)

        dims, conv = resolve_expression('')
        self.assertTrue(dims.is_dimensionless())
        self.assertEqual(conv.factor, 1)

    def test_to_base_symbols(self):
        from pyunitex.units import (to_base_symbols, resolve_expression,
                                    DimVector)

        self.assertEqual(to_base_symbols(resolve_expression('Ω').dims),
                         'kg m^2 s^-3 A^-2')
        self.assertEqual(to_base_symbols(resolve_expression('Kibyte foo^2'
                                                            ).dims),
                         'bit foo^2')
        self.assertEqual(to_base_symbols(DimVector.of(M=1), unicode=True),
                         'kg')
        self.assertEqual(to_base_symbols(DimVector.of(T=-2), unicode=True),
                         's⁻²')
