from unittest import TestCase
from unittest.mock import MagicMock
from nftledger.db.driver import InMemDriver, CacheDriver, ReadOnlyDriver, LedgerDriver, MongoDriver, make_key
from nftledger.db.encoder import encode_key
from nftledger.exceptions import ReadOnlyViolation


class TestInMemDriver(TestCase):
    def setUp(self):
        self.d = InMemDriver()

    def tearDown(self):
        self.d.flush()

    def test_get_set(self):
        self.d.set(('a', 'b'), 'value')

        self.assertEqual(self.d.get(('a', 'b')), 'value')

    def test_get_default(self):
        self.assertEqual(self.d.get(('missing',), 0), 0)
        self.assertIsNone(self.d.get(('missing',)))

    def test_delete(self):
        self.d.set(('a',), 1)
        self.d.delete(('a',))

        self.assertIsNone(self.d.get(('a',)))

    def test_delete_missing_is_noop(self):
        self.d.delete(('nothing',))

        self.assertEqual(self.d.keys(), [])

    def test_set_none_deletes(self):
        self.d.set(('a',), 1)
        self.d.set(('a',), None)

        self.assertEqual(self.d.keys(), [])

    def test_values_stored_encoded(self):
        self.d.set(('a',), 1000)

        self.assertEqual(self.d.db[('a',)], b'1000')

    def test_keys_by_prefix(self):
        self.d.set(('x', 'owners', 1), 'a')
        self.d.set(('x', 'owners', 2), 'b')
        self.d.set(('x', 'balances', 'a'), 1)
        self.d.set(('y', 'owners', 1), 'c')

        self.assertListEqual(self.d.keys(prefix=('x', 'owners')), [('x', 'owners', 1), ('x', 'owners', 2)])
        self.assertEqual(len(self.d.keys(prefix=('x',))), 3)
        self.assertEqual(len(self.d.keys()), 4)

    def test_item_access(self):
        self.d[('a',)] = 5

        self.assertEqual(self.d[('a',)], 5)

        del self.d[('a',)]

        with self.assertRaises(KeyError):
            self.d[('a',)]


class TestCacheDriver(TestCase):
    def setUp(self):
        self.raw = InMemDriver()
        self.d = CacheDriver(driver=self.raw)

    def test_writes_pending_until_commit(self):
        self.d.set(('a',), 1)

        self.assertEqual(self.d.get(('a',)), 1)
        self.assertIsNone(self.raw.get(('a',)))

        self.d.commit()

        self.assertEqual(self.raw.get(('a',)), 1)
        self.assertEqual(self.d.pending_writes, {})

    def test_rollback_discards_pending(self):
        self.raw.set(('a',), 1)

        self.d.set(('a',), 2)
        self.d.set(('b',), 3)
        self.d.rollback()

        self.assertEqual(self.d.get(('a',)), 1)
        self.assertIsNone(self.d.get(('b',)))

    def test_pending_delete_hides_base_value(self):
        self.raw.set(('a',), 1)

        self.d.delete(('a',))

        self.assertEqual(self.d.get(('a',), 'default'), 'default')
        self.assertEqual(self.d.keys(), [])

        self.d.commit()

        self.assertIsNone(self.raw.get(('a',)))

    def test_keys_merge_pending_and_base(self):
        self.raw.set(('n', 'a'), 1)
        self.d.set(('n', 'b'), 2)

        self.assertListEqual(self.d.keys(prefix=('n',)), [('n', 'a'), ('n', 'b')])
        self.assertDictEqual(self.d.items(prefix=('n',)), {('n', 'a'): 1, ('n', 'b'): 2})

    def test_stacked_caches_commit_one_level(self):
        outer = CacheDriver(driver=self.raw)
        inner = CacheDriver(driver=outer)

        inner.set(('a',), 1)
        inner.commit()

        self.assertEqual(outer.get(('a',)), 1)
        self.assertIsNone(self.raw.get(('a',)))

        outer.commit()

        self.assertEqual(self.raw.get(('a',)), 1)

    def test_flush_clears_everything(self):
        self.raw.set(('a',), 1)
        self.d.set(('b',), 2)

        self.d.flush()

        self.assertEqual(self.d.keys(), [])


class TestReadOnlyDriver(TestCase):
    def setUp(self):
        self.raw = InMemDriver()
        self.raw.set(('a',), 1)
        self.d = ReadOnlyDriver(self.raw)

    def test_reads_pass_through(self):
        self.assertEqual(self.d.get(('a',)), 1)
        self.assertEqual(self.d.get(('b',), 7), 7)

    def test_set_rejected(self):
        with self.assertRaises(ReadOnlyViolation):
            self.d.set(('a',), 2)

        self.assertEqual(self.raw.get(('a',)), 1)

    def test_delete_rejected(self):
        with self.assertRaises(ReadOnlyViolation):
            self.d.delete(('a',))


class TestLedgerDriver(TestCase):
    def test_make_key(self):
        d = LedgerDriver(namespace='punks')

        self.assertEqual(d.make_key('owners', 5), ('punks', 'owners', 5))
        self.assertEqual(make_key('punks', 'owners', 5), ('punks', 'owners', 5))

    def test_get_set_var(self):
        d = LedgerDriver(namespace='punks')

        d.set_var('operators', 'a', 'b', value=True)

        self.assertTrue(d.get_var('operators', 'a', 'b'))
        self.assertFalse(d.get_var('operators', 'b', 'a', default=False))
        self.assertListEqual(d.get_namespace_keys(), [('punks', 'operators', 'a', 'b')])


class TestMongoDriver(TestCase):
    def setUp(self):
        self.client = MagicMock()
        self.collection = self.client['nftledger']['state']
        self.d = MongoDriver(client=self.client)

    def test_uses_injected_collection(self):
        self.assertIs(self.d.collection, self.collection)

    def test_get_missing_returns_default(self):
        self.collection.find_one.return_value = None

        self.assertEqual(self.d.get(('nft', 'balances', 'a'), 0), 0)
        self.collection.find_one.assert_called_with({'_id': encode_key(('nft', 'balances', 'a'))})

    def test_get_decodes_value(self):
        self.collection.find_one.return_value = {'_id': 'x', 'v': '3'}

        self.assertEqual(self.d.get(('nft', 'balances', 'a')), 3)

    def test_set_upserts_encoded_value(self):
        self.d.set(('nft', 'owners', 1), 'abc')

        self.collection.update_one.assert_called_with(
            {'_id': '["nft","owners",1]'}, {'$set': {'v': '"abc"'}}, upsert=True
        )

    def test_set_none_deletes(self):
        self.d.set(('nft', 'owners', 1), None)

        self.collection.delete_one.assert_called_with({'_id': '["nft","owners",1]'})
        self.collection.update_one.assert_not_called()

    def test_keys_by_prefix(self):
        self.collection.find.return_value = [
            {'_id': '["nft","owners",2]'},
            {'_id': '["nft","owners",1]'},
            {'_id': '["nft","balances","a"]'},
        ]

        self.assertListEqual(self.d.keys(prefix=('nft', 'owners')), [('nft', 'owners', 1), ('nft', 'owners', 2)])

    def test_flush(self):
        self.d.flush()

        self.collection.delete_many.assert_called_with({})
