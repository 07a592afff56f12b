"""
Endpoint facades, one class per backend resource group.

Each facade takes the APIClient it should use, so parallel tests never share
auth state.
"""

from .account import CustomerAPI, HolidayAPI, ProfileAPI, StorageAPI
from .auth import AuthAPI
from .exchanges import ExchangeAPI
from .savings import SavingsAPI
from .topups import TopupAPI
from .wallets import WalletAPI

__all__ = [
    'AuthAPI',
    'CustomerAPI',
    'ExchangeAPI',
    'HolidayAPI',
    'ProfileAPI',
    'SavingsAPI',
    'StorageAPI',
    'TopupAPI',
    'WalletAPI',
]
