"""Errors raised while provisioning and deploying the raffle."""


class RaffleDeployError(Exception):
    """Base exception for the deployment run."""

    pass


class UnknownNetworkError(RaffleDeployError, LookupError):
    """Raised when the network id has no entry in the network config."""

    pass


class SubscriptionCreationError(RaffleDeployError):
    """Raised when a VRF subscription cannot be created, funded or resolved."""

    pass


class DeploymentError(RaffleDeployError):
    """Raised when the contract-creation transaction fails."""

    pass


class RegistrationError(RaffleDeployError):
    """Raised when the deployed contract cannot be added as a consumer."""

    pass


class VerificationError(RaffleDeployError):
    """Source verification failed. Never raised out of a run, only reported."""

    pass
