"""Storage charge, profile, customer and holiday endpoints."""
from ..api_client.base_client import APITestClient
from ..api_client.response import APIResponse
from ..data.test_data import API_ENDPOINTS
from ..models import Payload, to_payload


class StorageAPI:
    def __init__(self, api_client: APITestClient):
        self.api_client = api_client

    def get_storage_charges(self) -> APIResponse:
        return self.api_client.get(API_ENDPOINTS['storage']['get_charges'])

    def get_storage_charge_summary(self) -> APIResponse:
        return self.api_client.get(API_ENDPOINTS['storage']['get_summary'])


class ProfileAPI:
    def __init__(self, api_client: APITestClient):
        self.api_client = api_client

    def get_profile(self) -> APIResponse:
        return self.api_client.get(API_ENDPOINTS['profile']['get_profile'])

    def update_profile(self, profile_data: Payload) -> APIResponse:
        return self.api_client.put(API_ENDPOINTS['profile']['update_profile'], to_payload(profile_data))


class CustomerAPI:
    def __init__(self, api_client: APITestClient):
        self.api_client = api_client

    def get_customers(self) -> APIResponse:
        return self.api_client.get(API_ENDPOINTS['customers']['get_customers'])


class HolidayAPI:
    def __init__(self, api_client: APITestClient):
        self.api_client = api_client

    def get_holidays(self) -> APIResponse:
        return self.api_client.get(API_ENDPOINTS['holidays']['get_holidays'])
