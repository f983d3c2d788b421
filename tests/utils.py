from nftledger.db.driver import CacheDriver, InMemDriver
from nftledger.events import EventLog
from nftledger.execution.runtime import Context
from nftledger.ledger import TokenLedger
from nftledger import config

ZERO = config.ZERO_ACCOUNT

ADMIN = '324ee2e3544a8853a3c5a0ef0946b929aa488cbe'
ACC1 = 'a103715914a7aae8dd8fddba945ab63a169dfe6e'
ACC2 = '20da05fdba92449732b3871cc542a058075446fe'
ACC3 = 'ed19061921c593a9d16875ca660b57aa5e45c811'
STRANGER = 'cb9bfd4b57b243248796e9eb90bc4f0053d78f06'


def make_ledger(caller=ADMIN, namespace=config.DEFAULT_NAMESPACE):
    """Returns a ledger over a fresh in-memory store with a switchable caller."""
    raw = InMemDriver()
    driver = CacheDriver(driver=raw)
    ctx = Context({'caller': caller, 'signer': caller, 'this': namespace})
    ledger = TokenLedger(driver, ctx, EventLog(), namespace=namespace)
    return ledger, driver, ctx


def as_caller(ctx, account):
    ctx._set_state({'caller': account, 'signer': account, 'this': ctx.this})


def tables(driver, namespace=config.DEFAULT_NAMESPACE):
    """Groups every stored key of a namespace by table name."""
    t = {}
    for key, value in driver.items(prefix=(namespace,)).items():
        t.setdefault(key[1], {})[key[2:]] = value
    return t


def assert_invariants(test, driver, namespace=config.DEFAULT_NAMESPACE):
    t = tables(driver, namespace)

    owners = {k[0]: v for k, v in t.get(config.OWNERS, {}).items() if v != ZERO}
    balances = {k[0]: v for k, v in t.get(config.BALANCES, {}).items()}
    owned = t.get(config.OWNED_TOKENS, {})
    index = {k[0]: v for k, v in t.get(config.OWNED_TOKENS_INDEX, {}).items()}
    approvals = t.get(config.APPROVALS, {})
    supply = t.get(config.TOTAL_SUPPLY, {}).get((), 0)

    held = {}
    for token_id, owner in owners.items():
        held.setdefault(owner, set()).add(token_id)

    # balances match ownership
    for account in set(balances) | set(held):
        test.assertEqual(balances.get(account, 0), len(held.get(account, set())))

    # slots are dense and inverse to the index
    for owner, tokens in held.items():
        slots = {k[1]: v for k, v in owned.items() if k[0] == owner}
        test.assertEqual(set(slots.keys()), set(range(len(tokens))))
        test.assertEqual(set(slots.values()), tokens)
        for slot, token_id in slots.items():
            test.assertEqual(index[token_id], slot)

    test.assertEqual(len(owned), len(owners))
    test.assertEqual(set(index.keys()), set(owners.keys()))

    test.assertEqual(supply, len(owners))

    for key in approvals:
        test.assertIn(key[0], owners)
