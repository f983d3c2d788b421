from unittest import TestCase
from nftledger.policy import get_policy, AdministratorMintPolicy, OpenMintPolicy
from nftledger.exceptions import NotAuthorized, UnknownMintPolicy
from nftledger import config
from tests.utils import make_ledger, ADMIN, ACC1


class TestPolicies(TestCase):
    def setUp(self):
        self.ledger, _, _ = make_ledger(caller=ADMIN)
        self.ledger.seed(name='Punks', symbol='PNK')

    def test_lookup(self):
        self.assertIsInstance(get_policy(config.MINT_POLICY_ADMINISTRATOR), AdministratorMintPolicy)
        self.assertIsInstance(get_policy(config.MINT_POLICY_OPEN), OpenMintPolicy)

    def test_unknown(self):
        with self.assertRaises(UnknownMintPolicy) as cm:
            get_policy('lottery')

        self.assertEqual(cm.exception.kwargs['policy'], 'lottery')

    def test_unhashable_name(self):
        with self.assertRaises(UnknownMintPolicy):
            get_policy(['open'])

    def test_administrator_policy(self):
        policy = AdministratorMintPolicy()

        policy.authorize(self.ledger, ADMIN)

        with self.assertRaises(NotAuthorized):
            policy.authorize(self.ledger, ACC1)

    def test_open_policy(self):
        OpenMintPolicy().authorize(self.ledger, ACC1)
