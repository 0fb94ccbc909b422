"""
Deployment Runtime
Web3 connection, deployer account and compiled artifacts for contract deployment
"""

import os
import json
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Optional, Tuple
from web3 import Web3
from eth_account import Account
from loguru import logger
from dotenv import load_dotenv

from .contract_factory import ContractFactory
from .exceptions import ArtifactError, ArtifactNotFoundError, RuntimeConfigError


DEFAULT_RPC_URL = "http://127.0.0.1:8545"


def _int_env(name: str, default: Optional[int]) -> Optional[int]:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise RuntimeConfigError(f"{name} must be an integer, got {value!r}")


@dataclass(frozen=True)
class RuntimeConfig:
    """Network and build settings consumed by the deployment runtime"""

    rpc_url: str = DEFAULT_RPC_URL
    private_key: Optional[str] = None
    chain_id: Optional[int] = None
    artifacts_dir: str = "artifacts"
    confirmation_timeout: int = 120
    gas_buffer: float = 1.2  # 20% over the estimate

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Build configuration from the environment (.env is loaded first)

        Returns:
            RuntimeConfig
        """
        load_dotenv()

        return cls(
            rpc_url=os.getenv('DEPLOYER_RPC_URL') or DEFAULT_RPC_URL,
            private_key=os.getenv('DEPLOYER_PRIVATE_KEY') or None,
            chain_id=_int_env('DEPLOYER_CHAIN_ID', None),
            artifacts_dir=os.getenv('ARTIFACTS_DIR') or "artifacts",
            confirmation_timeout=_int_env('CONFIRMATION_TIMEOUT', 120),
        )


class DeploymentRuntime:
    """
    Gives out contract factories bound to one network and one deployer.

    With a private key configured, transactions are signed locally.
    Without one, the node's first unlocked account sends them
    (the usual setup against a local Hardhat node).
    """

    def __init__(self, w3: Web3, config: RuntimeConfig, account=None):
        """
        Initialize Deployment Runtime

        Args:
            w3: Web3 instance
            config: Runtime configuration
            account: Local signer (LocalAccount) or None for an unlocked node account
        """
        self.w3 = w3
        self.config = config
        self.account = account
        self._deployer_address = account.address if account is not None else None

    @classmethod
    def from_env(cls) -> "DeploymentRuntime":
        """Connect using configuration read from the environment"""
        return cls.from_config(RuntimeConfig.from_env())

    @classmethod
    def from_config(cls, config: RuntimeConfig) -> "DeploymentRuntime":
        """
        Connect to the configured network

        Args:
            config: Runtime configuration

        Returns:
            Connected DeploymentRuntime
        """
        w3 = Web3(Web3.HTTPProvider(config.rpc_url))

        if not w3.is_connected():
            raise ConnectionError(f"Failed to connect to network at {config.rpc_url}")

        account = Account.from_key(config.private_key) if config.private_key else None

        runtime = cls(w3, config, account)
        logger.info(f"Connected to {config.rpc_url} (chain id {runtime.chain_id})")
        return runtime

    @property
    def signs_locally(self) -> bool:
        return self.account is not None

    @property
    def chain_id(self) -> int:
        if self.config.chain_id is not None:
            return self.config.chain_id
        return self.w3.eth.chain_id

    @property
    def deployer_address(self) -> str:
        """Address that pays for and owns deployments"""
        if self._deployer_address is None:
            accounts = self.w3.eth.accounts
            if not accounts:
                raise RuntimeConfigError(
                    "DEPLOYER_PRIVATE_KEY is not set and the node has no unlocked accounts"
                )
            self._deployer_address = accounts[0]
        return self._deployer_address

    def get_balance(self) -> Decimal:
        """Deployer balance in ether"""
        balance_wei = self.w3.eth.get_balance(self.deployer_address)
        return Decimal(str(self.w3.from_wei(balance_wei, 'ether')))

    def artifact_path(self, contract_name: str) -> str:
        return os.path.join(
            self.config.artifacts_dir,
            "contracts",
            f"{contract_name}.sol",
            f"{contract_name}.json",
        )

    def load_artifact(self, contract_name: str) -> Tuple[List[Dict], str]:
        """
        Load ABI and bytecode from the Hardhat artifact of a contract

        Args:
            contract_name: Contract name, e.g. "AutoInvest"

        Returns:
            (abi, bytecode)
        """
        path = self.artifact_path(contract_name)

        if not os.path.exists(path):
            raise ArtifactNotFoundError(
                f"Contract artifact not found: {path} (run 'npx hardhat compile' first)"
            )

        with open(path, 'r') as f:
            try:
                contract_json = json.load(f)
            except json.JSONDecodeError as e:
                raise ArtifactError(f"Invalid artifact {path}: {e}") from e

        abi = contract_json.get('abi')
        bytecode = contract_json.get('bytecode')

        if abi is None or bytecode is None:
            raise ArtifactError(f"Artifact {path} has no abi or bytecode")

        if bytecode in ('', '0x'):
            raise ArtifactError(
                f"{contract_name} has empty bytecode (abstract contract or interface?)"
            )

        return abi, bytecode

    def get_contract_factory(self, contract_name: str) -> ContractFactory:
        """
        Get a factory for deploying new instances of a compiled contract

        Args:
            contract_name: Contract name, e.g. "AutoInvest"

        Returns:
            ContractFactory
        """
        abi, bytecode = self.load_artifact(contract_name)
        logger.debug(f"Loaded artifact for {contract_name}")
        return ContractFactory(self, contract_name, abi, bytecode)
