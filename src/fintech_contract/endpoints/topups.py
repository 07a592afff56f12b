"""Top-up endpoints."""
from ..api_client.base_client import APITestClient
from ..api_client.response import APIResponse
from ..data.test_data import API_ENDPOINTS
from ..models import Payload, to_payload

PATHS = API_ENDPOINTS['topups']


class TopupAPI:
    def __init__(self, api_client: APITestClient):
        self.api_client = api_client

    def create_topup(self, topup_data: Payload) -> APIResponse:
        return self.api_client.post(PATHS['create_topup'], to_payload(topup_data))

    def confirm_topup(self, reference: str) -> APIResponse:
        return self.api_client.post(PATHS['confirm_topup'].format(reference=reference))
