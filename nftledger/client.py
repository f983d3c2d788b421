from nftledger.execution.executor import Executor
from nftledger.db.driver import as_ledger_driver
from nftledger.db.orm import Hash, Variable
from nftledger.ledger import TokenLedger
from nftledger import config
from functools import partial


class AbstractLedger:
    def __init__(self, namespace, signer, executor: Executor):
        self.namespace = namespace
        self.signer = signer
        self.executor = executor

        # each exported function is a partial bound to the signer, overridable per call
        for func in sorted(TokenLedger.VIEWS | TokenLedger.MUTATORS):
            setattr(self, func, partial(self._abstract_function_call,
                                        executor=self.executor,
                                        func=func))

    def keys(self):
        return self.executor.driver.get_namespace_keys()

    def quick_read(self, variable, key=None, args=None):
        a = []

        if key is not None:
            a.append(key)

        if args is not None and isinstance(args, list):
            a.extend(args)

        return self.executor.driver.get_var(variable, *a)

    def table(self, name):
        return Hash(self.namespace, name, self.executor.driver)

    def variable(self, name):
        return Variable(self.namespace, name, self.executor.driver)

    def _abstract_function_call(self, *, executor, func, signer=None, **kwargs):
        output = executor.execute(sender=signer or self.signer,
                                  function_name=func,
                                  kwargs=kwargs)

        if output['status_code'] == 1:
            raise output['result']

        return output['result']


class LedgerClient:
    def __init__(self, signer='sys',
                 driver=None,
                 namespace=config.DEFAULT_NAMESPACE):

        self.raw_driver = as_ledger_driver(driver, namespace=namespace)
        self.executor = Executor(driver=self.raw_driver, namespace=namespace)
        self.signer = signer
        self.namespace = namespace

    @property
    def events(self):
        return self.executor.events

    def flush(self):
        self.raw_driver.flush()
        self.executor.events.clear()

    def seed(self, name, symbol, administrator=None, mint_policy=config.DEFAULT_MINT_POLICY, signer=None):
        ledger = self.get_ledger(signer=signer)
        ledger.seed(name=name, symbol=symbol, administrator=administrator, mint_policy=mint_policy)
        return ledger

    def get_ledger(self, signer=None):
        return AbstractLedger(namespace=self.namespace,
                              signer=signer or self.signer,
                              executor=self.executor)
