from nftledger.db.orm import Variable, Hash
from nftledger.exceptions import (
    InvalidAddress, InvalidRecipient, InvalidToken, InvalidIndex, AlreadyMinted,
    OwnerMismatch, NotAuthorized, ApprovalToCurrentOwner, ApproveToCaller, AlreadySeeded
)
from nftledger.policy import get_policy
from nftledger.logger import get_logger
from nftledger import config, events

ZERO_ACCOUNT = config.ZERO_ACCOUNT


class TokenLedger:
    """
    Non-fungible token ledger over a key-value store.

    State lives in coupled tables: owners, balances, single-spender approvals,
    operator approvals, token URIs and the per-owner enumeration index. The
    index is two tables, owned_tokens[owner, slot] -> token_id and
    owned_tokens_index[token_id] -> slot, kept dense with swap-and-pop.

    Every mutator checks all of its preconditions before its first write.
    The caller of the ledger owns the commit/rollback boundary.
    """

    VIEWS = frozenset({
        'name', 'symbol', 'administrator', 'mint_policy', 'total_supply',
        'balance_of', 'owner_of', 'token_uri', 'get_approved', 'is_approved_for_all',
        'exists', 'token_of_owner_by_index', 'tokens_of_owner',
    })

    MUTATORS = frozenset({
        'seed', 'mint', 'burn', 'transfer_from', 'approve', 'set_approval_for_all',
        'transfer_ownership',
    })

    def __init__(self, driver, context, event_log, namespace=config.DEFAULT_NAMESPACE):
        self.driver = driver
        self.ctx = context
        self.events = event_log
        self.namespace = namespace
        self.log = get_logger('Ledger')

        self._name = Variable(namespace, config.NAME, driver, t=str, default_value='')
        self._symbol = Variable(namespace, config.SYMBOL, driver, t=str, default_value='')
        self._administrator = Variable(namespace, config.ADMINISTRATOR, driver, t=str, default_value=ZERO_ACCOUNT)
        self._mint_policy = Variable(namespace, config.MINT_POLICY, driver, t=str, default_value=config.DEFAULT_MINT_POLICY)
        self._total_supply = Variable(namespace, config.TOTAL_SUPPLY, driver, t=int, default_value=0)

        self.owners = Hash(namespace, config.OWNERS, driver, default_value=ZERO_ACCOUNT)
        self.balances = Hash(namespace, config.BALANCES, driver, default_value=0)
        self.approvals = Hash(namespace, config.APPROVALS, driver, default_value=ZERO_ACCOUNT)
        self.operators = Hash(namespace, config.OPERATORS, driver, default_value=False)
        self.owned_tokens = Hash(namespace, config.OWNED_TOKENS, driver)
        self.owned_tokens_index = Hash(namespace, config.OWNED_TOKENS_INDEX, driver)
        self.token_uris = Hash(namespace, config.TOKEN_URIS, driver, default_value='')

    # Views

    def name(self):
        return self._name.get()

    def symbol(self):
        return self._symbol.get()

    def administrator(self):
        return self._administrator.get()

    def mint_policy(self):
        return self._mint_policy.get()

    def total_supply(self):
        return self._total_supply.get()

    def balance_of(self, account):
        self._require_account(account)
        return self.balances[account]

    def owner_of(self, token_id):
        self._require_minted(token_id)
        return self.owners[token_id]

    def token_uri(self, token_id):
        self._require_minted(token_id)
        return self.token_uris[token_id]

    def get_approved(self, token_id):
        self._require_minted(token_id)
        return self.approvals[token_id]

    def is_approved_for_all(self, owner, operator):
        return self.operators[owner, operator]

    def exists(self, token_id):
        self._require_token_id(token_id)
        return token_id in self.owners

    def token_of_owner_by_index(self, owner, index):
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < self.balance_of(owner):
            raise InvalidIndex(owner=owner, index=index)
        return self.owned_tokens[owner, index]

    def tokens_of_owner(self, owner):
        return [self.owned_tokens[owner, slot] for slot in range(self.balance_of(owner))]

    # Mutators

    def seed(self, name, symbol, administrator=None, mint_policy=config.DEFAULT_MINT_POLICY):
        if self._administrator.get() != ZERO_ACCOUNT:
            raise AlreadySeeded(namespace=self.namespace)

        if administrator is None:
            administrator = self.ctx.caller

        self._require_account(administrator)
        get_policy(mint_policy)

        self._name.set(name)
        self._symbol.set(symbol)
        self._administrator.set(administrator)
        self._mint_policy.set(mint_policy)

        self.log.info('Seeded {} ({}) administered by {}, mint policy {}'.format(
            name, symbol, administrator, mint_policy))

    def mint(self, to, token_id, uri=''):
        if not self._is_account(to):
            raise InvalidRecipient(account=to)
        if self.exists(token_id):
            raise AlreadyMinted(token_id=token_id)

        self.owners[token_id] = to
        del self.approvals[token_id]
        if uri:
            self.token_uris[token_id] = uri

        self._add_token_to_owner_enumeration(to, token_id)
        self.balances[to] += 1

        self._total_supply.set(self._total_supply.get() + 1)

        self.events.emit(events.MINT, sender=ZERO_ACCOUNT, to=to, token_id=token_id, uri=uri)
        self.log.debug('Minted {} to {}'.format(token_id, to))

    def burn(self, token_id):
        owner = self.owner_of(token_id)
        caller = self.ctx.caller

        if not self._is_approved_or_owner(caller, token_id):
            raise NotAuthorized(caller=caller, action='burn token {}'.format(token_id))

        self._remove_token_from_owner_enumeration(owner, token_id)
        self.balances[owner] -= 1

        del self.owners[token_id]
        del self.approvals[token_id]
        del self.token_uris[token_id]

        self._total_supply.set(self._total_supply.get() - 1)

        self.events.emit(events.BURN, owner=owner, to=ZERO_ACCOUNT, token_id=token_id)
        self.log.debug('Burned {} owned by {}'.format(token_id, owner))

    def transfer_from(self, sender, to, token_id):
        owner = self.owner_of(token_id)
        caller = self.ctx.caller

        if not self._is_approved_or_owner(caller, token_id):
            raise NotAuthorized(caller=caller, action='transfer token {}'.format(token_id))
        if sender != owner:
            raise OwnerMismatch(token_id=token_id, sender=sender, owner=owner)
        if not self._is_account(to):
            raise InvalidRecipient(account=to)

        # Sender side first so both owners' slots stay dense
        self._remove_token_from_owner_enumeration(sender, token_id)
        self.balances[sender] -= 1

        del self.approvals[token_id]

        self._add_token_to_owner_enumeration(to, token_id)
        self.balances[to] += 1

        self.owners[token_id] = to

        self.events.emit(events.TRANSFER, sender=sender, to=to, token_id=token_id)
        self.log.debug('Transferred {} from {} to {}'.format(token_id, sender, to))

    def approve(self, to, token_id):
        owner = self.owner_of(token_id)
        caller = self.ctx.caller

        if to == owner:
            raise ApprovalToCurrentOwner(token_id=token_id, owner=owner)
        if caller != owner and not self.is_approved_for_all(owner, caller):
            raise NotAuthorized(caller=caller, action='approve token {}'.format(token_id))
        if to != ZERO_ACCOUNT:
            self._require_account(to)

        if to == ZERO_ACCOUNT:
            del self.approvals[token_id]
        else:
            self.approvals[token_id] = to

        self.events.emit(events.APPROVAL, owner=owner, approved=to, token_id=token_id)

    def set_approval_for_all(self, operator, approved):
        owner = self.ctx.caller

        if operator == owner:
            raise ApproveToCaller(caller=owner)
        self._require_account(operator)

        approved = bool(approved)

        # Revocation deletes the entry; absence reads as False
        if approved:
            self.operators[owner, operator] = True
        else:
            del self.operators[owner, operator]

        self.events.emit(events.APPROVAL_FOR_ALL, owner=owner, operator=operator, approved=approved)

    def transfer_ownership(self, new_owner):
        caller = self.ctx.caller
        previous = self._administrator.get()

        if caller != previous:
            raise NotAuthorized(caller=caller, action='transfer ledger ownership')
        self._require_account(new_owner)

        self._administrator.set(new_owner)

        self.events.emit(events.OWNERSHIP_TRANSFERRED, previous_owner=previous, new_owner=new_owner)
        self.log.info('Ledger administration passed from {} to {}'.format(previous, new_owner))

    # Guards

    @staticmethod
    def _is_account(account):
        return isinstance(account, str) and account != '' and account != ZERO_ACCOUNT

    def _require_account(self, account):
        if not self._is_account(account):
            raise InvalidAddress(account=account)

    @staticmethod
    def _require_token_id(token_id):
        if not isinstance(token_id, int) or isinstance(token_id, bool) or token_id < 0:
            raise InvalidToken(token_id=token_id)

    def _require_minted(self, token_id):
        if not self.exists(token_id):
            raise InvalidToken(token_id=token_id)

    def _is_approved_or_owner(self, spender, token_id):
        owner = self.owner_of(token_id)
        return spender == owner or \
            self.is_approved_for_all(owner, spender) or \
            self.get_approved(token_id) == spender

    # Enumeration index

    def _add_token_to_owner_enumeration(self, owner, token_id):
        slot = self.balances[owner]
        self.owned_tokens[owner, slot] = token_id
        self.owned_tokens_index[token_id] = slot

    def _remove_token_from_owner_enumeration(self, owner, token_id):
        last_index = self.balances[owner] - 1
        delete_index = self.owned_tokens_index[token_id]

        # Swapping the last slot with itself would delete the moved entry below
        if delete_index != last_index:
            last_token_id = self.owned_tokens[owner, last_index]
            self.owned_tokens[owner, delete_index] = last_token_id
            self.owned_tokens_index[last_token_id] = delete_index

        del self.owned_tokens[owner, last_index]
        del self.owned_tokens_index[token_id]
