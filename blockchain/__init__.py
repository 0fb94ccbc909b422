"""
Blockchain Deployment Package
Handles runtime configuration, contract factories and deployment confirmation
"""

from .contract_factory import ContractFactory, PendingDeployment
from .deploy_params import AutoInvestParams
from .runtime import DeploymentRuntime, RuntimeConfig

__all__ = [
    'AutoInvestParams',
    'ContractFactory',
    'DeploymentRuntime',
    'PendingDeployment',
    'RuntimeConfig'
]
