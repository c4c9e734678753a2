"""Python client for the Stockpile API: session state, navigation guard and stockpile form."""
from stockpile_api.client.api import ApiClient, ApiError
from stockpile_api.client.auth import AuthGuard, AuthService
from stockpile_api.client.forms import StockpileForm
from stockpile_api.client.stockpiles import StockpileService

__all__ = ["ApiClient", "ApiError", "AuthGuard", "AuthService", "StockpileForm", "StockpileService"]
