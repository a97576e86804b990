from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Optional

from raffle_deploy.helper_config import NetworkProfile, confirmations_for


@dataclass
class Subscription:
    id: int
    coordinator_address: str
    funded_balance: int = 0
    consumers: set = field(default_factory=set)
    created_locally: bool = False


@dataclass(frozen=True)
class DeploymentRecord:
    contract_name: str
    address: str
    tx_hash: str
    confirmations: int
    constructor_args: tuple = ()

    def to_dict(self):
        data = asdict(self)
        data['constructor_args'] = list(self.constructor_args)
        return data


@dataclass(frozen=True)
class VerificationResult:
    submitted: bool
    ok: bool = False
    error: Optional[Exception] = None


@dataclass
class RunContext:
    """Everything one deployment run needs, passed explicitly to each step.

    ``deployer`` is called as ``deployer(contract_name, args, account, confirmations)``
    and returns a DeploymentRecord. ``verifier`` is called as
    ``verifier(address, args)``. ``coordinator`` is the VRF coordinator contract
    and is only used on simulated networks.
    """

    profile: NetworkProfile
    account: Any
    deployer: Callable
    coordinator: Any = None
    verifier: Optional[Callable] = None
    contract_name: str = 'Raffle'
    confirmations: Optional[int] = None
    log: Callable = print

    def __post_init__(self):
        if self.confirmations is None:
            self.confirmations = confirmations_for(self.profile.network_class)

    @property
    def network_class(self):
        return self.profile.network_class


@dataclass(frozen=True)
class DeploymentOutcome:
    record: DeploymentRecord
    subscription: Subscription
    verification: VerificationResult
