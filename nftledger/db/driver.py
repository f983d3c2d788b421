from nftledger.db.encoder import encode, decode, encode_key, decode_key
from nftledger.exceptions import ReadOnlyViolation
from nftledger.logger import get_logger
from nftledger import config
import pymongo

# DB maps encoded keys to encoded values
# Driver maps tuple keys to python objects
# Setting a value of None is the same as deleting the key


def make_key(namespace, variable, *args):
    return (namespace, variable, *args)


def _has_prefix(key: tuple, prefix: tuple):
    return key[:len(prefix)] == prefix


class InMemDriver:
    def __init__(self):
        self.db = {}

    def get(self, key: tuple, default=None):
        res = self.db.get(key)
        if res is None:
            return default
        return decode(res)

    def set(self, key: tuple, value):
        if value is None:
            self.delete(key)
        else:
            self.db[key] = encode(value).encode()

    def delete(self, key: tuple):
        self.db.pop(key, None)

    def keys(self, prefix=()):
        return sorted((k for k in self.db.keys() if _has_prefix(k, prefix)), key=encode_key)

    def items(self, prefix=()):
        return {k: self.get(k) for k in self.keys(prefix)}

    def flush(self):
        self.db.clear()

    def __getitem__(self, key: tuple):
        value = self.get(key)
        if value is None:
            raise KeyError(key)
        return value

    def __setitem__(self, key: tuple, value):
        self.set(key, value)

    def __delitem__(self, key: tuple):
        self.delete(key)


class MongoDriver:
    def __init__(self, db='nftledger', collection='state', host='localhost', port=27017, client=None):
        self.client = client or pymongo.MongoClient(host, port)
        self.db = self.client[db]
        self.collection = self.db[collection]

    def get(self, key: tuple, default=None):
        doc = self.collection.find_one({'_id': encode_key(key)})
        if doc is None:
            return default
        return decode(doc['v'])

    def set(self, key: tuple, value):
        if value is None:
            self.delete(key)
        else:
            self.collection.update_one({'_id': encode_key(key)}, {'$set': {'v': encode(value)}}, upsert=True)

    def delete(self, key: tuple):
        self.collection.delete_one({'_id': encode_key(key)})

    def keys(self, prefix=()):
        keys = [decode_key(doc['_id']) for doc in self.collection.find({}, {'_id': 1})]
        return sorted((k for k in keys if _has_prefix(k, prefix)), key=encode_key)

    def items(self, prefix=()):
        return {k: self.get(k) for k in self.keys(prefix)}

    def flush(self):
        self.collection.delete_many({})


class CacheDriver:
    """
    Buffers writes on top of a base driver. Nothing reaches the base driver
    until commit(); rollback() drops everything written since the last commit.
    """
    def __init__(self, driver=None):
        self.pending_writes = {}
        self.driver = driver if driver is not None else InMemDriver()
        self.log = get_logger('Driver')

    def get(self, key: tuple, default=None):
        if key in self.pending_writes:
            value = self.pending_writes[key]
            return default if value is None else value

        return self.driver.get(key, default)

    def set(self, key: tuple, value):
        self.pending_writes[key] = value

    def delete(self, key: tuple):
        self.set(key, None)

    def keys(self, prefix=()):
        keys = set(self.driver.keys(prefix))

        for k, v in self.pending_writes.items():
            if not _has_prefix(k, prefix):
                continue
            if v is None:
                keys.discard(k)
            else:
                keys.add(k)

        return sorted(keys, key=encode_key)

    def items(self, prefix=()):
        return {k: self.get(k) for k in self.keys(prefix)}

    def commit(self):
        for k, v in self.pending_writes.items():
            if v is None:
                self.driver.delete(k)
            else:
                self.driver.set(k, v)

        self.log.debug('Committed {} writes'.format(len(self.pending_writes)))
        self.pending_writes.clear()

    def rollback(self):
        if self.pending_writes:
            self.log.debug('Rolled back {} writes'.format(len(self.pending_writes)))
        self.pending_writes.clear()

    def flush(self):
        self.pending_writes.clear()
        self.driver.flush()


class ReadOnlyDriver:
    def __init__(self, driver):
        self.driver = driver

    def get(self, key: tuple, default=None):
        return self.driver.get(key, default)

    def set(self, key: tuple, value):
        raise ReadOnlyViolation(key=key)

    def delete(self, key: tuple):
        raise ReadOnlyViolation(key=key)

    def keys(self, prefix=()):
        return self.driver.keys(prefix)


class LedgerDriver(CacheDriver):
    def __init__(self, *args, namespace=config.DEFAULT_NAMESPACE, **kwargs):
        super().__init__(*args, **kwargs)
        self.namespace = namespace

    def make_key(self, variable, *args):
        return make_key(self.namespace, variable, *args)

    def get_var(self, variable, *args, default=None):
        return self.get(self.make_key(variable, *args), default)

    def set_var(self, variable, *args, value=None):
        self.set(self.make_key(variable, *args), value)

    def get_namespace_keys(self):
        return self.keys(prefix=(self.namespace,))


def as_ledger_driver(driver=None, namespace=config.DEFAULT_NAMESPACE):
    """
    Puts a LedgerDriver in front of a bare store so calls can commit and roll
    back. A LedgerDriver is used as given.
    """
    if isinstance(driver, LedgerDriver):
        return driver
    return LedgerDriver(driver=driver, namespace=namespace)
