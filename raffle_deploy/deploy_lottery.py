import json
import os
from pathlib import Path

from raffle_deploy.context import (
    DeploymentOutcome,
    Subscription,
    VerificationResult,
)
from raffle_deploy.exceptions import (
    DeploymentError,
    RegistrationError,
    SubscriptionCreationError,
    VerificationError,
)
from raffle_deploy.helper_config import FUND_AMOUNT

VERIFICATION_CREDENTIAL = 'ETHERSCAN_TOKEN'


def subscription_id_from(tx):
    # SubscriptionCreated(uint256 indexed subId, address owner)
    try:
        return tx.events['SubscriptionCreated']['subId']
    except (LookupError, TypeError) as exc:
        raise SubscriptionCreationError(
            'SubscriptionCreated event not found in createSubscription receipt'
        ) from exc


def provision_subscription(ctx, fund_amount=FUND_AMOUNT):
    profile = ctx.profile
    if not profile.is_simulated:
        if profile.subscription_id is None or not profile.vrf_coordinator:
            raise SubscriptionCreationError(
                f'{profile.name} needs a subscription id and a VRF coordinator address'
            )
        ctx.log(f'Using subscription {profile.subscription_id} on {profile.vrf_coordinator}')
        return Subscription(id=profile.subscription_id, coordinator_address=profile.vrf_coordinator)

    coordinator = ctx.coordinator
    if coordinator is None:
        raise SubscriptionCreationError(f'No VRF coordinator available on {profile.name}')
    ctx.log('Creating subscription...')
    try:
        tx = coordinator.createSubscription({'from': ctx.account})
        tx.wait(1)
    except Exception as exc:
        raise SubscriptionCreationError(f'createSubscription failed: {exc}') from exc
    subscription = Subscription(
        id=subscription_id_from(tx),
        coordinator_address=coordinator.address,
        created_locally=True,
    )
    try:
        tx = coordinator.fundSubscription(subscription.id, fund_amount, {'from': ctx.account})
        tx.wait(1)
    except Exception as exc:
        raise SubscriptionCreationError(
            f'fundSubscription({subscription.id}) failed: {exc}'
        ) from exc
    subscription.funded_balance += fund_amount
    ctx.log(f'Subscription {subscription.id} funded with {fund_amount}')
    return subscription


def constructor_args(profile, subscription):
    return (
        profile.entrance_fee,
        subscription.id,
        profile.key_hash,
        subscription.coordinator_address,
        profile.callback_gas_limit,
        profile.update_interval,
    )


def deploy_contract(ctx, subscription):
    args = constructor_args(ctx.profile, subscription)
    ctx.log(f'Deploying {ctx.contract_name} ({ctx.confirmations} confirmations)...')
    try:
        record = ctx.deployer(ctx.contract_name, args, ctx.account, ctx.confirmations)
    except Exception as exc:
        raise DeploymentError(f'{ctx.contract_name} deployment failed: {exc}') from exc
    ctx.log(f'{ctx.contract_name} deployed at {record.address}')
    return record


def register_consumer(ctx, subscription, record):
    """Add the deployed contract to the subscription's consumer allow-list.

    Live subscriptions are managed out of band, so this only acts on
    simulated networks. A failure leaves the contract deployed.
    """
    if not ctx.profile.is_simulated:
        return subscription
    try:
        tx = ctx.coordinator.addConsumer(subscription.id, record.address, {'from': ctx.account})
        tx.wait(1)
    except Exception as exc:
        raise RegistrationError(
            f'addConsumer({subscription.id}, {record.address}) failed: {exc}'
        ) from exc
    subscription.consumers.add(record.address)
    ctx.log(f'Consumer {record.address} added to subscription {subscription.id}')
    return subscription


def verify_deployment(ctx, record, environ=None):
    environ = os.environ if environ is None else environ
    if ctx.profile.is_simulated:
        return VerificationResult(submitted=False)
    if not environ.get(VERIFICATION_CREDENTIAL):
        ctx.log(f'Skipping verification: {VERIFICATION_CREDENTIAL} is not set')
        return VerificationResult(submitted=False)
    if ctx.verifier is None:
        ctx.log('Skipping verification: no verifier configured')
        return VerificationResult(submitted=False)
    ctx.log('Verifying...')
    try:
        ctx.verifier(record.address, record.constructor_args)
    except Exception as exc:
        error = VerificationError(f'Verification of {record.address} failed: {exc}')
        error.__cause__ = exc
        ctx.log(str(error))
        return VerificationResult(submitted=True, ok=False, error=error)
    ctx.log(f'{record.address} verified')
    return VerificationResult(submitted=True, ok=True)


def save_deployment(record, profile, directory):
    path = Path(directory) / profile.name / f'{record.contract_name}.json'
    path.parent.mkdir(parents=True, exist_ok=True)
    data = record.to_dict()
    data['chain_id'] = profile.chain_id
    data['network'] = profile.name
    with open(path, 'w') as f:
        json.dump(data, f, indent=2)
    return path


def deploy_lottery(ctx, artifacts_dir=None, environ=None):
    ctx.log(f'The active network is {ctx.profile.name} ({ctx.network_class.value})')
    subscription = provision_subscription(ctx)
    ctx.log('----------------------------------------------------')
    record = deploy_contract(ctx, subscription)
    register_consumer(ctx, subscription, record)
    verification = verify_deployment(ctx, record, environ=environ)
    if artifacts_dir is not None:
        path = save_deployment(record, ctx.profile, artifacts_dir)
        ctx.log(f'Deployment record written to {path}')
    ctx.log('----------------------------------------------------')
    return DeploymentOutcome(record=record, subscription=subscription, verification=verification)
