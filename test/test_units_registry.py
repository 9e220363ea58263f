from unittest import TestCase


def _small_catalog():
    from pyunitex.units import Catalog, UnitDef, PrefixDef, Multiplicative
    return Catalog('small', units=(
        UnitDef(symbols=('m',), axis='L', prefixes={'SI'}),
        UnitDef(symbols=('s',), axis='T', prefixes={'SI'}),
        UnitDef(symbols=('ft',), basis='m', conv=Multiplicative(0.3048)),
        UnitDef(symbols=('fps',), basis='ft s^-1'),
    ), prefixes=(
        PrefixDef(symbols=('k',), factor=1e3),
        PrefixDef(symbols=('m',), factor=1e-3),
    ))


class TestRegistry(TestCase):
    def test_build(self):
        from pyunitex.units import Registry, DimVector

        reg = Registry([_small_catalog()])
        fps = reg.resolve('fps').unit
        dims, conv = reg.expand(fps)
        self.assertEqual(dims, DimVector.of(L=1, T=-1))
        self.assertAlmostEqual(conv.factor, 0.3048)
        self.assertEqual(reg.base_units_of(fps), dims)
        self.assertEqual(reg.base_symbol('L'), 'm')
        self.assertIsNone(reg.base_symbol('M'))
        self.assertEqual(len(reg.units()), 4)
        self.assertEqual(len(reg.prefixes()), 2)

    def test_resolve(self):
        from pyunitex.units import Registry

        reg = Registry([_small_catalog()])
        match = reg.resolve('km')
        self.assertEqual(match.unit.symbol, 'm')
        self.assertEqual(match.prefix.factor, 1e3)

        # Test unprefixed match is preferred, i.e. metre not milli-?.
        self.assertIsNone(reg.resolve('m').prefix)
        self.assertEqual(reg.resolve('mm').prefix_text, 'm')

        self.assertIsNone(reg.resolve('kft'))  # Prefix not allowed.
        self.assertIsNone(reg.resolve('k'))  # Prefix alone.
        self.assertIsNone(reg.resolve('furlong'))

    def test_first_catalog_wins(self):
        from pyunitex.units import (Registry, Catalog, UnitDef,
                                    Multiplicative)

        other = Catalog('other', units=(
            UnitDef(symbols=('ft', 'foot'), basis='m',
                    conv=Multiplicative(0.3)),))
        reg = Registry([_small_catalog(), other])
        self.assertAlmostEqual(reg.expand(reg.resolve('ft').unit)[1].factor,
                               0.3048)
        # Non-clashing alias of the later definition is still available.
        self.assertAlmostEqual(
            reg.expand(reg.resolve('foot').unit)[1].factor, 0.3)

    def test_duplicate_in_catalog(self):
        from pyunitex.units import (Registry, Catalog, UnitDef,
                                    DuplicateSymbol)

        bad = Catalog('bad', units=(
            UnitDef(symbols=('m',), axis='L'),
            UnitDef(symbols=('metre', 'm'), axis='L')))
        with self.assertRaises(DuplicateSymbol):
            Registry([bad])

    def test_cycle(self):
        from pyunitex.units import (Registry, Catalog, UnitDef,
                                    DefinitionError)

        cyclic = Catalog('cyclic', units=(
            UnitDef(symbols=('a',), basis='b'),
            UnitDef(symbols=('b',), basis='c^2'),
            UnitDef(symbols=('c',), basis='a')))
        with self.assertRaises(DefinitionError) as cm:
            Registry([cyclic])
        self.assertIn('a -> b -> c -> a', str(cm.exception))

    def test_bad_basis(self):
        from pyunitex.units import (Registry, Catalog, UnitDef, Affine,
                                    DefinitionError)

        # Test unknown symbol in a basis.
        with self.assertRaises(DefinitionError):
            Registry([Catalog('x', units=(
                UnitDef(symbols=('x',), basis='nothing'),))])

        # Test non-multiplicative basis.
        with self.assertRaises(DefinitionError):
            Registry([Catalog('x', units=(
                UnitDef(symbols=('K',), axis='θ'),
                UnitDef(symbols=('degC',), basis='K',
                        conv=Affine(1, 273.15)),
                UnitDef(symbols=('y',), basis='degC')))])

    def test_register(self):
        from pyunitex.units import (Registry, UnitDef, PrefixDef,
                                    Multiplicative, DuplicateSymbol,
                                    DefinitionError)

        reg = Registry([_small_catalog()])
        rev = reg.revision

        reg.register_unit(UnitDef(symbols=('yd',), basis='ft',
                                  conv=Multiplicative(3)))
        self.assertAlmostEqual(reg.expand(reg.resolve('yd').unit)[1].factor,
                               0.9144)
        self.assertGreater(reg.revision, rev)

        with self.assertRaises(DuplicateSymbol):
            reg.register_unit(UnitDef(symbols=('yard', 'yd'), basis='m'))
        self.assertIsNone(reg.resolve('yard'))

        # Test a failed registration leaves the registry unchanged.
        with self.assertRaises(DefinitionError):
            reg.register_unit(UnitDef(symbols=('zz',), basis='zz'))
        self.assertIsNone(reg.resolve('zz'))

        # Test symbols usable in expressions are required.
        with self.assertRaises(ValueError):
            reg.register_unit(UnitDef(symbols=('a b',), basis='m'))

        reg.register_prefix(PrefixDef(symbols=('M',), factor=1e6))
        self.assertEqual(reg.resolve('Mm').prefix.factor, 1e6)
        with self.assertRaises(DuplicateSymbol):
            reg.register_prefix(PrefixDef(symbols=('k',), factor=1e3))

    def test_default_registry(self):
        from pyunitex.units import (get_registry, set_registry, Registry,
                                    register_unit, UnitDef, Multiplicative,
                                    convert, DuplicateSymbol)

        original = get_registry()
        try:
            set_registry(Registry([_small_catalog()]))
            register_unit(UnitDef(symbols=('hop',), basis='m',
                                  conv=Multiplicative(2)))
            self.assertEqual(convert(3, 'hop', 'm'), 6)
            with self.assertRaises(DuplicateSymbol):
                register_unit(UnitDef(symbols=('hop',), basis='m'))
        finally:
            set_registry(original)

        self.assertIs(get_registry(), original)
        self.assertIsNone(get_registry().resolve('hop'))

    def test_default_catalogs(self):
        from pyunitex.units import get_registry

        reg = get_registry()
        self.assertEqual(reg.resolve('min').unit.name, 'minute')
        self.assertEqual(reg.resolve('dam').prefix_text, 'da')
        self.assertIsNone(reg.resolve('mkg'))
        self.assertEqual(reg.resolve('ohm').unit.symbol, 'Ω')
        self.assertEqual(reg.base_symbol('M'), 'kg')
        self.assertTrue(all(d.reference for d in reg.reference_units()))
