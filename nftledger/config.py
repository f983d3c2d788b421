# The reserved "no account" identity: the 20 byte zero address, hex encoded
ZERO_ACCOUNT = '0' * 40

DEFAULT_NAMESPACE = 'nft'

# Table names inside a namespace
NAME = 'name'
SYMBOL = 'symbol'
ADMINISTRATOR = 'administrator'
MINT_POLICY = 'mint_policy'
TOTAL_SUPPLY = 'total_supply'

OWNERS = 'owners'
BALANCES = 'balances'
APPROVALS = 'approvals'
OPERATORS = 'operators'
OWNED_TOKENS = 'owned_tokens'
OWNED_TOKENS_INDEX = 'owned_tokens_index'
TOKEN_URIS = 'token_uris'

MINT_POLICY_ADMINISTRATOR = 'administrator'
MINT_POLICY_OPEN = 'open'
DEFAULT_MINT_POLICY = MINT_POLICY_ADMINISTRATOR

PRIVATE_METHOD_PREFIX = '_'

MAX_HASH_DIMENSIONS = 16
MAX_KEY_SIZE = 1024
