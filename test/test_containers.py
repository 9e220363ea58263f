from unittest import TestCase


class TestWriteOnceDict(TestCase):
    def test__setitem__(self):
        from pyunitex.containers import WriteOnceDict

        symbols = WriteOnceDict({'m': 'metre'})
        symbols['s'] = 'second'
        self.assertEqual(symbols['s'], 'second')

        # Test overwriting is blocked.
        with self.assertRaises(KeyError):
            symbols['m'] = 'mile'
        self.assertEqual(symbols['m'], 'metre')

        # Test key can be reused after deletion.
        del symbols['m']
        symbols['m'] = 'mile'
        self.assertEqual(symbols['m'], 'mile')
        self.assertEqual(len(symbols), 2)

    def test_setdefault(self):
        from pyunitex.containers import WriteOnceDict

        store = WriteOnceDict()
        self.assertEqual(store.setdefault('k', 1), 1)
        self.assertEqual(store.setdefault('k', 2), 1)  # First value kept.
        self.assertEqual(store.get('k'), 1)
        self.assertIsNone(store.get('missing'))

        store.clear()
        self.assertFalse(store)
