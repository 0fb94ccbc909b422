"""
AutoInvest Deployment Script
Deploys the AutoInvest contract and prints its address
"""

import asyncio
import sys
from typing import Optional
from loguru import logger

from blockchain.deploy_params import AutoInvestParams
from blockchain.runtime import DeploymentRuntime
from utils.logging_setup import setup_logging


CONTRACT_NAME = "AutoInvest"


async def main(
    runtime: Optional[DeploymentRuntime] = None,
    params: Optional[AutoInvestParams] = None
) -> str:
    """
    Deploy AutoInvest and wait for confirmation

    Connection, artifact loading and submission run synchronously before the
    first await; the receipt wait is the only step moved off the event loop.

    Args:
        runtime: Deployment runtime (connects from .env when omitted)
        params: Constructor arguments (authoring-time defaults when omitted)

    Returns:
        Deployed contract address
    """
    if runtime is None:
        runtime = DeploymentRuntime.from_env()
    if params is None:
        params = AutoInvestParams()

    # Artifact must already be compiled: npx hardhat compile
    AutoInvest = runtime.get_contract_factory(CONTRACT_NAME)

    invest = AutoInvest.deploy(*params.constructor_args())

    await invest.deployed()

    print("AutoInvest deployed to:", invest.address)
    return invest.address


def run(
    runtime: Optional[DeploymentRuntime] = None,
    params: Optional[AutoInvestParams] = None
) -> int:
    """
    Run one deployment

    Returns:
        Process exit code: 0 on success, 1 on any failure
    """
    setup_logging()

    try:
        asyncio.run(main(runtime, params))
    except Exception:
        logger.exception("AutoInvest deployment failed")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(run())
