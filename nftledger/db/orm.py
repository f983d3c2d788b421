from nftledger.db.driver import make_key
from nftledger import config


class Datum:
    def __init__(self, namespace, name, driver):
        self._driver = driver
        self._key = make_key(namespace, name)


class Variable(Datum):
    def __init__(self, namespace, name, driver, t=None, default_value=None):
        self._type = None

        if isinstance(t, type):
            self._type = t

        self._default_value = default_value

        super().__init__(namespace, name, driver=driver)

    def set(self, value):
        if self._type is not None:
            assert isinstance(value, self._type), 'Wrong type passed to variable! Expected {}, got {}.'.format(
                self._type,
                type(value)
            )

        self._driver.set(self._key, value)

    def get(self):
        return self._driver.get(self._key, self._default_value)


class Hash(Datum):
    """
    A keyed table inside a namespace. Multi-part keys are tuples and are
    stored as (namespace, name, *parts) so no two distinct keys can collide.
    """
    def __init__(self, namespace, name, driver, default_value=None):
        super().__init__(namespace, name, driver=driver)
        self._default_value = default_value

    def _validate_key(self, key):
        parts = key if isinstance(key, tuple) else (key,)

        assert len(parts) <= config.MAX_HASH_DIMENSIONS, 'Too many dimensions ({}) for hash. Max is {}'.format(
            len(parts), config.MAX_HASH_DIMENSIONS
        )

        for k in parts:
            assert not isinstance(k, slice), 'Slices prohibited in hashes.'
            assert k is not None, 'None is not a valid hash key.'
            assert len(str(k)) <= config.MAX_KEY_SIZE, 'Key is too long. Max is {}.'.format(config.MAX_KEY_SIZE)

        return self._key + parts

    def _set(self, key, value):
        self._driver.set(key, value)

    def _get(self, key):
        # Add Python defaultdict behavior for easier contract code
        return self._driver.get(key, self._default_value)

    def __setitem__(self, key, value):
        self._set(self._validate_key(key), value)

    def __getitem__(self, key):
        return self._get(self._validate_key(key))

    def __delitem__(self, key):
        self._driver.delete(self._validate_key(key))

    def __contains__(self, key):
        return self._driver.get(self._validate_key(key)) is not None
