import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from web3 import Web3

from raffle_deploy.exceptions import SubscriptionCreationError, UnknownNetworkError

FUND_AMOUNT = Web3.to_wei(1, "ether")
VERIFICATION_BLOCK_CONFIRMATIONS = 6
DEVELOPMENT_CHAINS = ['hardhat', 'localhost', 'development', 'ganache-local']

'''
uint256 entranceFee,
uint256 subscriptionId,
bytes32 gasLane, // keyHash
address vrfCoordinatorV2,
uint32 callbackGasLimit,
uint256 interval
'''
NETWORK_CONFIG = {
    31337: {
        'name': 'hardhat',
        'entrance_fee': Web3.to_wei(0.01, 'ether'),
        'key_hash': '0x474e34a077df58807dbe9c96d3c009b23b3c6d0cce433e59bbf5b34f823bc56c',
        'callback_gas_limit': 500000,
        'update_interval': 30,
    },
    1337: {
        'name': 'development',
        'entrance_fee': Web3.to_wei(0.01, 'ether'),
        'key_hash': '0x474e34a077df58807dbe9c96d3c009b23b3c6d0cce433e59bbf5b34f823bc56c',
        'callback_gas_limit': 500000,
        'update_interval': 30,
    },
    11155111: {
        'name': 'sepolia',
        'entrance_fee': Web3.to_wei(0.01, 'ether'),
        'key_hash': '0x787d74caea10b2b357790d5b5247c2f63d1d91572a9846f780606e4d953677ae',
        'callback_gas_limit': 500000,
        'update_interval': 30,
        'vrf_coordinator': '0x9ddfaca8183c41ad55329bb3d4b3b6a0fbb1df7b',
        # filled from VRF_SUBSCRIPTION_ID when missing
        'subscription_id': None,
    },
}


class NetworkClass(Enum):
    SIMULATED = 'simulated'
    LIVE = 'live'


@dataclass(frozen=True)
class NetworkProfile:
    chain_id: int
    name: str
    network_class: NetworkClass
    entrance_fee: int
    key_hash: str
    callback_gas_limit: int
    update_interval: int
    vrf_coordinator: Optional[str] = None
    subscription_id: Optional[int] = None

    @property
    def is_simulated(self):
        return self.network_class is NetworkClass.SIMULATED


def _lookup(network_id, config):
    if isinstance(network_id, str) and network_id.strip().isdigit():
        network_id = int(network_id)
    if isinstance(network_id, int):
        if network_id in config:
            return network_id, config[network_id]
    else:
        for chain_id, entry in config.items():
            if entry.get('name') == network_id:
                return chain_id, entry
    raise UnknownNetworkError(f'No network config for {network_id!r}')


def classify(chain_id, name):
    if chain_id in (31337, 1337) or name in DEVELOPMENT_CHAINS:
        return NetworkClass.SIMULATED
    return NetworkClass.LIVE


def resolve_network(network_id, config=None, environ=None):
    """Map a chain id or network name to its NetworkProfile.

    Args:
        network_id ([int | str]): chain id (``31337``, ``"11155111"``) or a
        network name from the config (``"sepolia"``).
        config ([dict], optional): network table, defaults to NETWORK_CONFIG.
        environ ([mapping], optional): environment used to fill a live
        network's subscription id from ``VRF_SUBSCRIPTION_ID``.
    Raises:
        UnknownNetworkError: the id has no entry. There is no default profile.
        SubscriptionCreationError: ``VRF_SUBSCRIPTION_ID`` is not an integer.
    """
    config = NETWORK_CONFIG if config is None else config
    environ = os.environ if environ is None else environ
    chain_id, entry = _lookup(network_id, config)
    name = entry.get('name', str(chain_id))
    network_class = classify(chain_id, name)

    vrf_coordinator = None
    subscription_id = None
    if network_class is NetworkClass.LIVE:
        if entry.get('vrf_coordinator'):
            vrf_coordinator = Web3.to_checksum_address(entry['vrf_coordinator'])
        subscription_id = entry.get('subscription_id')
        if subscription_id is None and environ.get('VRF_SUBSCRIPTION_ID'):
            try:
                subscription_id = int(environ['VRF_SUBSCRIPTION_ID'])
            except ValueError as exc:
                raise SubscriptionCreationError(
                    f"VRF_SUBSCRIPTION_ID must be an integer, got {environ['VRF_SUBSCRIPTION_ID']!r}"
                ) from exc

    return NetworkProfile(
        chain_id=chain_id,
        name=name,
        network_class=network_class,
        entrance_fee=entry['entrance_fee'],
        key_hash=entry['key_hash'],
        callback_gas_limit=entry['callback_gas_limit'],
        update_interval=entry['update_interval'],
        vrf_coordinator=vrf_coordinator,
        subscription_id=subscription_id,
    )


def confirmations_for(network_class, live_confirmations=VERIFICATION_BLOCK_CONFIRMATIONS):
    if network_class is NetworkClass.SIMULATED:
        return 1
    return live_confirmations
