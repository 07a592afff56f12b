"""Savings plan endpoints, including the HTML table and detail fragments."""
from typing import Optional

from ..api_client.base_client import APITestClient
from ..api_client.response import APIResponse
from ..data.test_data import API_ENDPOINTS
from ..models import Payload, to_payload

PATHS = API_ENDPOINTS['savings']


class SavingsAPI:
    def __init__(self, api_client: APITestClient):
        self.api_client = api_client

    def get_savings_plans(self) -> APIResponse:
        return self.api_client.get(PATHS['get_plans'])

    def create_savings_plan(self, plan_data: Payload) -> APIResponse:
        return self.api_client.post(PATHS['create_plan'], to_payload(plan_data))

    def get_savings_plan_by_id(self, plan_id) -> APIResponse:
        return self.api_client.get(PATHS['get_plan_by_id'].format(plan_id=plan_id))

    def get_savings_plans_table(self, params: Optional[Payload] = None) -> APIResponse:
        """Returns an HTML fragment; read it with response.text."""
        return self.api_client.get(PATHS['get_plans_table'], to_payload(params))

    def get_savings_plan_details_fragment(self, plan_id) -> APIResponse:
        """Returns an HTML fragment; read it with response.text."""
        return self.api_client.get(PATHS['get_plan_details_fragment'].format(plan_id=plan_id))

    def get_reference_prices(self) -> APIResponse:
        return self.api_client.get(API_ENDPOINTS['prices']['get_prices'])
