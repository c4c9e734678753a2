from stockpile_api.stores.stockpiles import StockpileStore
from stockpile_api.stores.users import UserStore

__all__ = ["StockpileStore", "UserStore"]
