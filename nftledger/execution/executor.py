from nftledger.execution import runtime
from nftledger.db.driver import CacheDriver, ReadOnlyDriver, as_ledger_driver
from nftledger.exceptions import LedgerError, FunctionNotExported
from nftledger.events import EventLog
from nftledger.ledger import TokenLedger
from nftledger.policy import get_policy
from nftledger.logger import get_logger
from nftledger import config
from copy import deepcopy
import traceback

log = get_logger('Executor')


class Executor:
    def __init__(self, driver=None, namespace=config.DEFAULT_NAMESPACE):
        self.driver = as_ledger_driver(driver, namespace=namespace)

        self.namespace = namespace
        self.events = EventLog()
        self.rt = runtime.Runtime()

    def _resolve(self, function_name):
        if function_name.startswith(config.PRIVATE_METHOD_PREFIX):
            raise FunctionNotExported(function_name=function_name)

        if function_name in TokenLedger.VIEWS:
            return False
        if function_name in TokenLedger.MUTATORS:
            return True

        raise FunctionNotExported(function_name=function_name)

    def execute(self, sender, function_name, kwargs=None, auto_commit=True) -> dict:
        kwargs = kwargs or {}

        # Each call writes into its own layer so a failure discards exactly this call
        call_driver = CacheDriver(driver=self.driver)
        event_log = EventLog()

        self.rt.set_up(sender=sender, this=self.namespace)

        try:
            mutates = self._resolve(function_name)

            driver = call_driver if mutates else ReadOnlyDriver(call_driver)
            ledger = TokenLedger(driver, self.rt.context, event_log, namespace=self.namespace)

            if function_name == 'mint':
                get_policy(ledger.mint_policy()).authorize(ledger, sender)

            result = getattr(ledger, function_name)(**kwargs)

            writes = deepcopy(call_driver.pending_writes)
            call_driver.commit()

            if auto_commit:
                self.driver.commit()

            status_code = 0
            self.events.extend(event_log)
        except LedgerError as e:
            result = e
            writes = {}
            status_code = 1
            log.warning('{} by {} failed: {}'.format(function_name, sender, e))
        except Exception as e:
            result = e
            writes = {}
            status_code = 1
            log.error(str(e))
            log.error(traceback.format_exc())
        finally:
            self.rt.clean_up()

        output = {
            'status_code': status_code,
            'result': result,
            'writes': writes,
            'events': list(event_log) if status_code == 0 else [],
        }

        return output
