"""Authentication endpoints: login, signup, password and PIN flows."""
from ..api_client.base_client import APITestClient
from ..api_client.response import APIResponse
from ..data.test_data import API_ENDPOINTS
from ..models import Payload, to_payload

PATHS = API_ENDPOINTS['auth']


class AuthAPI:
    """Facade over the /api/auth endpoints.

    Unlike APIClient.login(), login() here returns the raw response so tests
    can assert on failed logins.
    """

    def __init__(self, api_client: APITestClient):
        self.api_client = api_client

    def login(self, email: str, password: str) -> APIResponse:
        return self.api_client.post(PATHS['login'], {
            'grant_type': 'password',
            'email': email,
            'password': password,
        })

    def signup(self, user_data: Payload) -> APIResponse:
        return self.api_client.post(PATHS['signup'], to_payload(user_data))

    def forgot_password(self, email: str) -> APIResponse:
        return self.api_client.post(PATHS['forgot_password'], {'email': email})

    def reset_password(self, new_password: str, token: str) -> APIResponse:
        return self.api_client.post(PATHS['reset_password'], {
            'new_password': new_password,
            'token': token,
        })

    def send_phone_otp(self, phone_number: str, pin_code: str) -> APIResponse:
        return self.api_client.post(PATHS['send_phone_otp'], {
            'grant_type': 'phone_otp',
            'phone_number': phone_number,
            'pin_code': pin_code,
        })

    def resend_otp(self, phone_number: str) -> APIResponse:
        return self.api_client.post(PATHS['resend_otp'], {'phone_number': phone_number})

    def forgot_pin(self, phone_number: str) -> APIResponse:
        return self.api_client.post(PATHS['forgot_pin'], {'phone_number': phone_number})

    def reset_pin(self, new_pin: str, token: str) -> APIResponse:
        return self.api_client.post(PATHS['reset_pin'], {
            'new_pin': new_pin,
            'token': token,
        })
