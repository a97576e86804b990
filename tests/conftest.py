import pytest

from raffle_deploy.context import DeploymentRecord, RunContext
from raffle_deploy.helper_config import resolve_network

DEPLOYER = '0x66aB6D9362d4F35596279692F0251Db635165871'
RAFFLE_ADDRESS = '0x3194cBDC3dbcd3E11a07892e7bA5c3394048Cc87'
COORDINATOR_ADDRESS = '0x602C71e4DAC47a042Ee7f46E0aee17F94A3bA0B6'


class FakeReceipt:
    def __init__(self, events=None):
        self.events = events if events is not None else {}
        self.waited = []

    def wait(self, confirmations):
        self.waited.append(confirmations)


class FakeCoordinator:
    """In-memory stand-in for the VRFCoordinatorV2_5Mock brownie contract."""

    def __init__(self, address=COORDINATOR_ADDRESS, revert_on=(), emit_event=True):
        self.address = address
        self.revert_on = set(revert_on)
        self.emit_event = emit_event
        self.subscriptions = {}
        self.calls = []

    def _call(self, name, *args):
        self.calls.append((name,) + args)
        if name in self.revert_on:
            raise RuntimeError(f'{name} reverted')

    def createSubscription(self, tx_params):
        self._call('createSubscription', tx_params)
        sub_id = len(self.subscriptions) + 1
        self.subscriptions[sub_id] = {'balance': 0, 'consumers': []}
        if not self.emit_event:
            return FakeReceipt()
        return FakeReceipt({'SubscriptionCreated': {'subId': sub_id, 'owner': tx_params['from']}})

    def fundSubscription(self, sub_id, amount, tx_params):
        self._call('fundSubscription', sub_id, amount, tx_params)
        self.subscriptions[sub_id]['balance'] += amount
        return FakeReceipt()

    def addConsumer(self, sub_id, consumer, tx_params):
        self._call('addConsumer', sub_id, consumer, tx_params)
        self.subscriptions[sub_id]['consumers'].append(consumer)
        return FakeReceipt()


class FakeDeployer:
    def __init__(self, address=RAFFLE_ADDRESS, fail=False):
        self.address = address
        self.fail = fail
        self.calls = []

    def __call__(self, contract_name, args, account, confirmations):
        self.calls.append((contract_name, args, account, confirmations))
        if self.fail:
            raise RuntimeError('transaction reverted during deployment')
        return DeploymentRecord(
            contract_name=contract_name,
            address=self.address,
            tx_hash='0x' + 'ab' * 32,
            confirmations=confirmations,
            constructor_args=tuple(args),
        )


class FakeVerifier:
    def __init__(self, fail=False):
        self.fail = fail
        self.calls = []

    def __call__(self, address, args):
        self.calls.append((address, args))
        if self.fail:
            raise RuntimeError('explorer unavailable')


@pytest.fixture()
def coordinator():
    return FakeCoordinator()


@pytest.fixture()
def deployer():
    return FakeDeployer()


@pytest.fixture()
def verifier():
    return FakeVerifier()


@pytest.fixture()
def simulated_context(coordinator, deployer, verifier):
    return RunContext(
        profile=resolve_network(31337),
        account=DEPLOYER,
        deployer=deployer,
        coordinator=coordinator,
        verifier=verifier,
    )


@pytest.fixture()
def live_context(coordinator, deployer, verifier):
    profile = resolve_network(11155111, environ={'VRF_SUBSCRIPTION_ID': '4242'})
    return RunContext(
        profile=profile,
        account=DEPLOYER,
        deployer=deployer,
        coordinator=coordinator,
        verifier=verifier,
    )
