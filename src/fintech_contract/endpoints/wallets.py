"""Wallet endpoints."""
from ..api_client.base_client import APITestClient
from ..api_client.response import APIResponse
from ..data.test_data import API_ENDPOINTS
from ..models import Payload, to_payload

PATHS = API_ENDPOINTS['wallets']


class WalletAPI:
    def __init__(self, api_client: APITestClient):
        self.api_client = api_client

    def get_wallets(self) -> APIResponse:
        return self.api_client.get(PATHS['get_wallets'])

    def create_wallet(self, wallet_data: Payload) -> APIResponse:
        return self.api_client.post(PATHS['create_wallet'], to_payload(wallet_data))

    def deposit(self, deposit_data: Payload) -> APIResponse:
        return self.api_client.post(PATHS['deposit'], to_payload(deposit_data))

    def delete_wallet(self, wallet_id: int) -> APIResponse:
        return self.api_client.delete(PATHS['delete_wallet'].format(wallet_id=wallet_id))
