from nftledger.exceptions import NotAuthorized, UnknownMintPolicy
from nftledger import config


class MintPolicy:
    """
    Decides who may mint on a deployment. Checked by the executor before
    TokenLedger.mint runs; the ledger itself has no opinion.
    """
    name = None

    def authorize(self, ledger, caller):
        raise NotImplementedError


class AdministratorMintPolicy(MintPolicy):
    name = config.MINT_POLICY_ADMINISTRATOR

    def authorize(self, ledger, caller):
        if caller != ledger.administrator():
            raise NotAuthorized(caller=caller, action='mint')


class OpenMintPolicy(MintPolicy):
    name = config.MINT_POLICY_OPEN

    def authorize(self, ledger, caller):
        pass


POLICIES = {
    AdministratorMintPolicy.name: AdministratorMintPolicy,
    OpenMintPolicy.name: OpenMintPolicy,
}


def get_policy(name):
    try:
        return POLICIES[name]()
    except (KeyError, TypeError):
        raise UnknownMintPolicy(policy=name, known_policies=sorted(POLICIES))
