from brownie import accounts, chain, config, network, project

from raffle_deploy.context import DeploymentRecord, RunContext
from raffle_deploy.exceptions import DeploymentError, SubscriptionCreationError, VerificationError
from raffle_deploy.helper_config import NetworkClass, resolve_network

BASE_FEE = 250000000000000000  # 0.25 LINK per request
GAS_PRICE_LINK = 1000000000  # 1 gwei
WEI_PER_UNIT_LINK = 4000000000000000

COORDINATOR_MOCK = 'VRFCoordinatorV2_5Mock'


def get_container(contract_name, error=DeploymentError):
    loaded = project.get_loaded_projects()
    if not loaded:
        raise error(f'No brownie project loaded, cannot find {contract_name}')
    try:
        return loaded[0][contract_name]
    except KeyError as exc:
        raise error(f'{contract_name} is not part of the loaded brownie project') from exc


def get_account(network_class):
    if network_class is NetworkClass.SIMULATED:
        return accounts[0]
    return accounts.add(config['wallets']['from_key'])


def deploy_mocks(account):
    print(f'The active network is {network.show_active()}')
    print('Deploying mocks...')
    coordinator = get_container(COORDINATOR_MOCK, SubscriptionCreationError).deploy(
        BASE_FEE, GAS_PRICE_LINK, WEI_PER_UNIT_LINK, {'from': account}
    )
    print(f'Deployed {COORDINATOR_MOCK} to {coordinator.address}')
    return coordinator


def get_coordinator(network_class, account):
    """Return the VRF coordinator mock, deploying it on first use.

    Live networks talk to the real coordinator only through the address in
    their profile, so there is nothing to return for them.
    """
    if network_class is not NetworkClass.SIMULATED:
        return None
    container = get_container(COORDINATOR_MOCK, SubscriptionCreationError)
    if len(container) <= 0:
        deploy_mocks(account)
    return container[-1]


def brownie_deployer(contract_name, args, account, confirmations):
    contract = get_container(contract_name).deploy(
        *args, {'from': account, 'required_confs': confirmations}
    )
    return DeploymentRecord(
        contract_name=contract_name,
        address=contract.address,
        tx_hash=contract.tx.txid,
        confirmations=contract.tx.confirmations,
        constructor_args=tuple(args),
    )


def etherscan_verifier(contract_name):
    def verify(address, args):
        container = get_container(contract_name, VerificationError)
        # brownie reads the constructor args back from the creation tx
        if not container.publish_source(container.at(address)):
            raise VerificationError(f'explorer rejected {contract_name} at {address}')

    return verify


def build_run_context(contract_name='Raffle', log=print):
    profile = resolve_network(chain.id)
    account = get_account(profile.network_class)
    return RunContext(
        profile=profile,
        account=account,
        deployer=brownie_deployer,
        coordinator=get_coordinator(profile.network_class, account),
        verifier=etherscan_verifier(contract_name),
        contract_name=contract_name,
        log=log,
    )
