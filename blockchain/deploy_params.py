"""
Deployment Parameters
Constructor arguments for the AutoInvest contract
"""

from dataclasses import dataclass, astuple


@dataclass(frozen=True)
class AutoInvestParams:
    """
    AutoInvest constructor arguments, in constructor order.

    Times are unix timestamps, intervals and periods are seconds.
    The dates in the comments are approximate; the integers are what
    gets deployed.
    """

    # Uniswap V3 ISwapRouter instance
    swap_router: str = "0xE592427A0AEce92De3Edee1F18E0157C05861564"
    buy_start_time: int = 1672502400  # 2023-01-01 00:00:00
    buy_end_time: int = 1735660800  # 2024-12-31 24:00:00
    waiting_period: int = 15638400  # selling opens about half a year later
    min_buy_interval: int = 604800  # 1 week
    max_buy_interval: int = 1814400  # 3 weeks
    min_sell_interval: int = 604800  # 1 week
    max_sell_interval: int = 1209600  # 2 weeks

    def constructor_args(self) -> tuple:
        """Positional arguments for AutoInvest.constructor(...)"""
        return astuple(self)
