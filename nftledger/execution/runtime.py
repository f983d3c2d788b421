class Context:
    def __init__(self, base_state):
        self._base_state = base_state

    def _get_state(self):
        return self._base_state

    def _set_state(self, state: dict):
        self._base_state = state

    @property
    def this(self):
        return self._get_state()['this']

    @property
    def caller(self):
        return self._get_state()['caller']

    @property
    def signer(self):
        return self._get_state()['signer']


_EMPTY_STATE = {
    'this': None,
    'caller': None,
    'signer': None
}


class Runtime:
    # One per executor; ledgers on different executors never see each other's caller
    def __init__(self):
        self.context = Context(dict(_EMPTY_STATE))

    def set_up(self, sender, this):
        self.context._set_state({
            'signer': sender,
            'caller': sender,
            'this': this
        })

    def clean_up(self):
        self.context._set_state(dict(_EMPTY_STATE))
