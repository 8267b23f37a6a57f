from .balance import BalancePass

__all__ = ["BalancePass"]
