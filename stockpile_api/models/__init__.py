from stockpile_api.models.stockpile import Stockpile
from stockpile_api.models.users import Role, User

__all__ = ["Role", "Stockpile", "User"]
