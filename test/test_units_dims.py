from unittest import TestCase


class TestDimVector(TestCase):
    def test_of(self):
        from fractions import Fraction
        from pyunitex.units import DimVector, UnknownAxis

        # Test repeated axes are summed and zeros dropped.
        x = DimVector.of({'L': 1, 'T': -2}, L=1, M=0)
        self.assertEqual(x.L, 2)
        self.assertEqual(x.T, -2)
        self.assertEqual(x.M, 0)
        self.assertIsInstance(x.L, Fraction)

        # Test extra axes are kept in canonical order.
        y = DimVector.of({UnknownAxis('foo'): 1, 'bit': 2})
        z = DimVector.of({'bit': 2, UnknownAxis('foo'): 1})
        self.assertEqual(y, z)
        self.assertEqual(y.extra[0][0], 'bit')
        self.assertEqual(DimVector.of({'bit': 0}), DimVector())

    def test_arithmetic(self):
        from fractions import Fraction
        from pyunitex.units import DimVector

        force = DimVector.of(M=1, L=1, T=-2)
        length = DimVector.of(L=1)
        self.assertEqual(force + length, DimVector.of(M=1, L=2, T=-2))
        self.assertEqual(force - force, DimVector())
        self.assertTrue((force - force).is_dimensionless())
        self.assertEqual(-length, DimVector.of(L=-1))
        self.assertEqual(2 * length, length * 2)

        half = length * Fraction(1, 2)
        self.assertEqual(half.L, Fraction(1, 2))
        self.assertFalse(half.is_integral())
        self.assertTrue((half * 2).is_integral())

    def test_unknown_axes(self):
        from pyunitex.units import DimVector, UnknownAxis

        foo = DimVector.of({UnknownAxis('foo'): 1})
        bar = DimVector.of({UnknownAxis('bar'): 1})
        self.assertNotEqual(foo, bar)
        self.assertEqual(foo - foo, DimVector())

        # Test an unknown symbol never matches a named axis.
        self.assertNotEqual(DimVector.of({UnknownAxis('bit'): 1}),
                            DimVector.of({'bit': 1}))

        mixed = DimVector.of({'L': 1, UnknownAxis('foo'): 2})
        self.assertEqual(mixed.known(), DimVector.of(L=1))
        self.assertEqual(mixed.unknowns(), ((UnknownAxis('foo'), 2),))
        self.assertEqual(mixed.exp(UnknownAxis('foo')), 2)
        self.assertEqual(mixed.exp('T'), 0)

    def test___str__(self):
        from fractions import Fraction
        from pyunitex.units import DimVector, UnknownAxis

        self.assertEqual(str(DimVector.of(M=1, L=1, T=-2)), 'M L T^-2')
        self.assertEqual(str(DimVector.of(L=Fraction(1, 2))), 'L^1/2')
        self.assertEqual(str(DimVector.of({UnknownAxis('foo'): 1,
                                           'θ': -1})), 'θ^-1 foo')
        self.assertEqual(str(DimVector()), '')
