"""
Deployment Errors
Failure types raised by the deployment runtime
"""

from typing import Optional


class DeploymentError(Exception):
    """Base class for every failure of the deployment sequence"""


class RuntimeConfigError(DeploymentError):
    """Runtime configuration is missing or malformed"""


class ArtifactError(DeploymentError):
    """Compiled contract artifact is unusable"""


class ArtifactNotFoundError(ArtifactError):
    """Compiled contract artifact does not exist"""


class DeploymentRevertedError(DeploymentError):
    """Deployment transaction was mined with status 0"""

    def __init__(self, message: str, tx_hash: Optional[str] = None):
        super().__init__(message)
        self.tx_hash = tx_hash
