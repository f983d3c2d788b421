from nftledger.logger import get_logger

MINT = 'Mint'
TRANSFER = 'Transfer'
BURN = 'Burn'
APPROVAL = 'Approval'
APPROVAL_FOR_ALL = 'ApprovalForAll'
OWNERSHIP_TRANSFERRED = 'OwnershipTransferred'


class Event:
    def __init__(self, name, **data):
        self.name = name
        self.data = data

    def __getitem__(self, item):
        return self.data[item]

    def __eq__(self, other):
        if not isinstance(other, Event):
            return NotImplemented
        return self.name == other.name and self.data == other.data

    def __repr__(self):
        args = ', '.join('{}={!r}'.format(k, v) for k, v in self.data.items())
        return '{}({})'.format(self.name, args)

    def to_dict(self):
        return {'event': self.name, 'data': dict(self.data)}


class EventLog:
    """
    Collects the events emitted during one call. The executor decides whether
    they are published (the call succeeded) or dropped (it failed).
    """
    def __init__(self):
        self._events = []
        self.log = get_logger('Events')

    def emit(self, name, **data):
        event = Event(name, **data)
        self._events.append(event)
        self.log.debug('Emitted {}'.format(event))
        return event

    def extend(self, events):
        self._events.extend(events)

    def clear(self):
        self._events = []

    def of_type(self, name):
        return [e for e in self._events if e.name == name]

    def __iter__(self):
        return iter(list(self._events))

    def __len__(self):
        return len(self._events)

    def __getitem__(self, item):
        return self._events[item]
