"""Collateral price feeds"""
from .constants import DEFAULT_COLLATERAL_PRICE


class FixedPriceOracle:
    """Oracle returning a settable price, frEUR per unit of collateral"""

    def __init__(self, price: int = DEFAULT_COLLATERAL_PRICE):
        self.price = price

    def set_price(self, price: int) -> None:
        self.price = price

    def get_price(self) -> int:
        return self.price

    def __repr__(self):
        return f"FixedPriceOracle(price={self.price})"
