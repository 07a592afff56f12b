"""Exchange endpoints: history, create, pairs, quotes and rates."""
from typing import Optional

from ..api_client.base_client import APITestClient
from ..api_client.response import APIResponse
from ..data.test_data import API_ENDPOINTS
from ..models import Payload, to_payload

PATHS = API_ENDPOINTS['exchanges']


class ExchangeAPI:
    def __init__(self, api_client: APITestClient):
        self.api_client = api_client

    def get_exchanges(self, limit: Optional[int] = None) -> APIResponse:
        params = {'limit': limit} if limit is not None else None
        return self.api_client.get(PATHS['get_exchanges'], params)

    def create_exchange(self, exchange_data: Payload) -> APIResponse:
        return self.api_client.post(PATHS['create_exchange'], to_payload(exchange_data))

    def get_exchange_by_id(self, exchange_id: int) -> APIResponse:
        return self.api_client.get(PATHS['get_exchange_by_id'].format(exchange_id=exchange_id))

    def get_exchange_pairs(self) -> APIResponse:
        return self.api_client.get(PATHS['get_pairs'])

    def get_exchange_quote(self, params: Payload) -> APIResponse:
        return self.api_client.get(PATHS['get_quote'], to_payload(params))

    def get_exchange_rates(self) -> APIResponse:
        return self.api_client.get(PATHS['get_rates'])
