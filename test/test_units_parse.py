from unittest import TestCase


class TestParse(TestCase):
    def test_exponents(self):
        from fractions import Fraction
        from pyunitex.units import parse

        expr = parse('kg^3 m^4 s^-6 A^-1')
        self.assertEqual([t.symbol for t in expr.terms],
                         ['kg', 'm', 's', 'A'])
        self.assertEqual([t.exponent for t in expr.terms], [3, 4, -6, -1])

        expr = parse('Pa^1/2 m^+2 Hz^-3/2')
        self.assertEqual([t.exponent for t in expr.terms],
                         [Fraction(1, 2), 2, Fraction(-3, 2)])

        # Test unicode superscripts.
        expr = parse('m² s⁻¹')
        self.assertEqual([(t.symbol, t.exponent) for t in expr.terms],
                         [('m', 2), ('s', -1)])
        self.assertFalse(any(t.is_unknown for t in expr.terms))

    def test_prefixes(self):
        from pyunitex.units import parse

        # Test unprefixed symbols are preferred.
        (term,) = parse('min').terms
        self.assertEqual(term.unit.symbol, 'min')
        self.assertIsNone(term.prefix)

        (term,) = parse('Pa').terms
        self.assertEqual(term.unit.symbol, 'Pa')

        # Test longest prefix is tried first.
        (term,) = parse('dam').terms
        self.assertEqual(term.prefix_text, 'da')
        self.assertEqual(term.unit.symbol, 'm')

        # Test prefix aliases.
        (term,) = parse('us').terms
        self.assertEqual(term.prefix.symbol, 'μ')
        self.assertEqual(term.prefix_text, 'u')

        # Test binary prefixes only apply to binary units.
        (term,) = parse('Kibyte').terms
        self.assertEqual(term.prefix.factor, 1024)
        self.assertTrue(parse('Kim').terms[0].is_unknown)

        # Test units that don't accept prefixes.
        self.assertTrue(parse('mkg').terms[0].is_unknown)
        self.assertTrue(parse('kmin').terms[0].is_unknown)
        self.assertEqual(parse('mg').terms[0].unit.symbol, 'g')

    def test_unknown(self):
        from pyunitex.units import parse

        expr = parse('m foo^2 bar')
        self.assertEqual([t.is_unknown for t in expr.terms],
                         [False, True, True])
        self.assertEqual(expr.terms[1].symbol, 'foo')
        self.assertEqual(expr.terms[1].exponent, 2)
        self.assertEqual(str(expr), 'm foo^2 bar')

        # Test malformed exponents are kept as literals and never raise.
        for text in ('m^x', 'm^', 'm^1/0', 'm^2^3', '^2'):
            with self.subTest(text=text):
                (term,) = parse(text).terms
                self.assertTrue(term.is_unknown)
                self.assertEqual(term.symbol, text)

    def test_empty_and_repeats(self):
        from pyunitex.units import parse, UnitExpr

        self.assertEqual(parse(''), UnitExpr())
        self.assertEqual(parse('   '), UnitExpr())

        # Test repeated symbols are not merged.
        expr = parse('m  m')
        self.assertEqual(len(expr.terms), 2)
        self.assertEqual(str(expr), 'm m')

        # Test an existing expression is returned unchanged.
        self.assertIs(parse(expr), expr)

    def test_warn_unknown(self):
        import warnings
        from pyunitex.units import parse, set_unit_options

        set_unit_options(warn_unknown=True)
        try:
            with self.assertWarns(UserWarning):
                parse('m foo')
        finally:
            set_unit_options(warn_unknown=False)

        with warnings.catch_warnings():
            warnings.simplefilter('error')
            parse('m foo')  # No warning by default.

    def test_level_token(self):
        from pyunitex.units import parse

        expr = parse('dlog(re 1 mW) s')
        self.assertEqual(len(expr.terms), 2)
        level = expr.terms[0]
        self.assertFalse(level.is_unknown)
        self.assertEqual(level.prefix.symbol, 'd')
        self.assertEqual(level.unit.symbol, 'log(re 1 mW)')


class TestTokenize(TestCase):
    def test_tokenize(self):
        from fractions import Fraction
        from pyunitex.units._parse import tokenize
        from pyunitex.units import FormatError

        self.assertEqual(tokenize('N m^-2'),
                         [('N', Fraction(1)), ('m', Fraction(-2))])
        self.assertEqual(tokenize(''), [])
        with self.assertRaises(FormatError):
            tokenize('m^2.5')
