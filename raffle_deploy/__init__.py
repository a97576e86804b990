from raffle_deploy.context import (
    DeploymentOutcome,
    DeploymentRecord,
    RunContext,
    Subscription,
    VerificationResult,
)
from raffle_deploy.exceptions import (
    DeploymentError,
    RaffleDeployError,
    RegistrationError,
    SubscriptionCreationError,
    UnknownNetworkError,
    VerificationError,
)
from raffle_deploy.helper_config import NetworkClass, NetworkProfile, resolve_network

__version__ = '0.1.0'
