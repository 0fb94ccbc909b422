"""
Contract Factory
Submits contract deployments and waits for their confirmation
"""

import asyncio
from typing import Dict, List, Optional
from web3 import Web3
from loguru import logger

from .exceptions import DeploymentError, DeploymentRevertedError


class ContractFactory:
    """
    Deploys new instances of one compiled contract
    """

    def __init__(self, runtime, contract_name: str, abi: List[Dict], bytecode: str):
        """
        Initialize Contract Factory

        Args:
            runtime: DeploymentRuntime the factory is bound to
            contract_name: Contract name (for logging)
            abi: Contract ABI
            bytecode: Creation bytecode
        """
        self.runtime = runtime
        self.w3 = runtime.w3
        self.contract_name = contract_name
        self.abi = abi
        self.bytecode = bytecode
        self.contract = self.w3.eth.contract(abi=abi, bytecode=bytecode)

    def deploy(self, *args, gas_limit: Optional[int] = None) -> "PendingDeployment":
        """
        Submit a deployment transaction

        Returns as soon as the transaction is broadcast; await
        PendingDeployment.deployed() for the address.

        Args:
            *args: Constructor arguments, positional
            gas_limit: Explicit gas limit; estimated from the node when omitted

        Returns:
            PendingDeployment
        """
        deployer = self.runtime.deployer_address
        constructor = self.contract.constructor(*args)

        logger.info(f"Deploying {self.contract_name} from {deployer}")
        logger.info(f"Deployer balance: {self.runtime.get_balance()} ETH")
        logger.debug(f"Constructor args: {args}")

        if gas_limit is None:
            gas_limit = self._estimate_gas_limit(constructor, deployer)
        logger.info(f"Gas limit: {gas_limit}")

        if self.runtime.signs_locally:
            tx_hash = self._send_signed(constructor, deployer, gas_limit)
        else:
            tx_hash = constructor.transact({'from': deployer, 'gas': gas_limit})

        tx_hash_hex = Web3.to_hex(tx_hash)
        logger.info(f"Transaction sent: {tx_hash_hex}")

        return PendingDeployment(self.runtime, self.contract_name, self.abi, tx_hash_hex)

    def _estimate_gas_limit(self, constructor, deployer: str) -> int:
        # Estimation errors (reverting constructor, RPC failure) abort the deployment
        gas_estimate = constructor.estimate_gas({'from': deployer})
        return int(gas_estimate * self.runtime.config.gas_buffer)

    def _send_signed(self, constructor, deployer: str, gas_limit: int) -> bytes:
        gas_price = self.w3.eth.gas_price
        logger.info(f"Gas price: {self.w3.from_wei(gas_price, 'gwei')} gwei")

        transaction = constructor.build_transaction({
            'from': deployer,
            'nonce': self.w3.eth.get_transaction_count(deployer, 'pending'),
            'gas': gas_limit,
            'gasPrice': gas_price,
            'chainId': self.runtime.chain_id
        })

        signed_tx = self.runtime.account.sign_transaction(transaction)
        return self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)


class PendingDeployment:
    """
    A broadcast deployment transaction; address is set once it is mined
    """

    def __init__(self, runtime, contract_name: str, abi: List[Dict], tx_hash: str):
        self.runtime = runtime
        self.contract_name = contract_name
        self.abi = abi
        self.tx_hash = tx_hash
        self.address: Optional[str] = None
        self.receipt = None

    async def deployed(self) -> "PendingDeployment":
        """
        Wait until the deployment transaction is mined

        Returns:
            self, with address set

        Raises:
            DeploymentRevertedError: transaction mined with status 0
            web3.exceptions.TimeExhausted: no receipt within confirmation_timeout
        """
        if self.address is not None:
            return self

        logger.info("Waiting for confirmation...")

        receipt = await asyncio.to_thread(
            self.runtime.w3.eth.wait_for_transaction_receipt,
            self.tx_hash,
            timeout=self.runtime.config.confirmation_timeout
        )

        if receipt['status'] != 1:
            raise DeploymentRevertedError(
                f"{self.contract_name} deployment reverted (tx {self.tx_hash})",
                tx_hash=self.tx_hash
            )

        contract_address = receipt.get('contractAddress')
        if not contract_address:
            raise DeploymentError(f"Receipt for {self.tx_hash} has no contract address")

        self.receipt = receipt
        self.address = Web3.to_checksum_address(contract_address)

        logger.success(f"{self.contract_name} confirmed in block {receipt['blockNumber']}")
        logger.info(f"Gas used: {receipt['gasUsed']}")
        return self

    def contract(self):
        """Contract instance bound to the deployed address"""
        if self.address is None:
            raise DeploymentError(f"{self.contract_name} deployment is not confirmed yet")
        return self.runtime.w3.eth.contract(address=self.address, abi=self.abi)
