class LedgerError(Exception):
    """
    The base exception for the ledger. The fmt directive
    will be overloaded by the inheriting classes

    :ivar msg: The message associated with the error
    """
    fmt = 'An unspecified error occurred'

    def __init__(self, **kwargs):
        msg = self.fmt.format(**kwargs)
        Exception.__init__(self, msg)
        self.kwargs = kwargs


class InvalidAddress(LedgerError):
    """
    The zero account, or something that is not an account,
    was used where a real account is required

    :ivar account: The offending value
    """
    fmt = "'{account}' is not a valid account"


class InvalidRecipient(InvalidAddress):
    """
    A mint or transfer named the zero account as recipient
    """
    fmt = "Cannot send token to '{account}'"


class InvalidToken(LedgerError):
    """
    The token id is malformed, was never minted or has been burned

    :ivar token_id: The token id
    """
    fmt = "Invalid token ID '{token_id}'"


class InvalidIndex(LedgerError):
    fmt = "Owner '{owner}' has no token at index {index}"


class AlreadyMinted(LedgerError):
    fmt = "Token '{token_id}' already minted"


class OwnerMismatch(LedgerError):
    """
    The declared sender of a transfer is not the token's current owner

    :ivar token_id: The token being transferred
    :ivar sender: The declared sender
    :ivar owner: The actual owner
    """
    fmt = "Token '{token_id}' is owned by '{owner}', not '{sender}'"


class NotAuthorized(LedgerError):
    """
    The caller is neither the owner nor approved for the action

    :ivar caller: The invoking account
    :ivar action: What the caller attempted
    """
    fmt = "Caller '{caller}' is not authorized to {action}"


class ApprovalToCurrentOwner(LedgerError):
    fmt = "Approval of token '{token_id}' to its current owner '{owner}'"


class ApproveToCaller(LedgerError):
    fmt = "Account '{caller}' cannot approve itself as operator"


class ReadOnlyViolation(LedgerError):
    """
    A read-only call attempted to write to the store

    :ivar key: The key that would have been written
    """
    fmt = "Write to '{key}' attempted during a read-only call"


class FunctionNotExported(LedgerError):
    fmt = "Function '{function_name}' is not callable on the ledger"


class UnknownMintPolicy(LedgerError):
    """
    The mint policy stored for a deployment is not registered

    :ivar policy: The policy name
    :ivar known_policies: The registered policy names
    """
    fmt = "Unknown mint policy '{policy}', known policies '{known_policies}'"


class AlreadySeeded(LedgerError):
    fmt = "Ledger '{namespace}' has already been seeded"
