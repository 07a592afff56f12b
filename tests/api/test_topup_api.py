"""Top-up API tests, including concurrent creation."""

import unittest

import pytest

from fintech_contract.api_client import fan_out
from fintech_contract.data import RESPONSE_CODES, TEST_DATA
from fintech_contract.endpoints import TopupAPI
from fintech_contract.helpers import TestHelpers
from fintech_contract.models import TopupCreate


class TestTopupAPI(unittest.TestCase):

    @pytest.fixture(autouse=True)
    def _client(self, authenticated_client):
        self.topup_api = TopupAPI(authenticated_client)
        self.wallet_id = TEST_DATA['topup']['valid_topup'].wallet_id

    def create_reference(self, amount=500):
        response = self.topup_api.create_topup(TopupCreate(amount=amount, wallet_id=self.wallet_id))
        body = TestHelpers.validate_response_structure(response, ['reference'])
        return body['reference']

    def test_create_topup(self):
        response = self.topup_api.create_topup(TEST_DATA['topup']['valid_topup'])
        body = TestHelpers.expect_success_response(response)
        self.assertIsInstance(body['reference'], str)
        self.assertTrue(body['reference'])

    def test_create_topup_with_invalid_wallet(self):
        response = self.topup_api.create_topup(TopupCreate(amount=500, wallet_id=99999))
        TestHelpers.expect_error_response(response, RESPONSE_CODES['BAD_REQUEST'])

    def test_create_topup_with_negative_amount(self):
        response = self.topup_api.create_topup(TopupCreate(amount=-100, wallet_id=self.wallet_id))
        TestHelpers.expect_error_response(response, RESPONSE_CODES['BAD_REQUEST'])

    def test_create_topup_with_zero_amount(self):
        response = self.topup_api.create_topup(TopupCreate(amount=0, wallet_id=self.wallet_id))
        TestHelpers.expect_error_response(response, RESPONSE_CODES['BAD_REQUEST'])

    def test_create_topup_without_required_fields(self):
        TestHelpers.expect_error_response(self.topup_api.create_topup({}), RESPONSE_CODES['BAD_REQUEST'])

    def test_confirm_topup(self):
        reference = self.create_reference()
        body = TestHelpers.expect_success_response(self.topup_api.confirm_topup(reference))
        self.assertRegex(body['message'].lower(), r'success|confirmed|processed')

    def test_confirm_non_existent_topup(self):
        response = self.topup_api.confirm_topup('INVALID-REF-123')
        TestHelpers.expect_error_response(response, RESPONSE_CODES['NOT_FOUND'])

    def test_confirm_topup_with_empty_reference(self):
        TestHelpers.expect_error_response(self.topup_api.confirm_topup(''), RESPONSE_CODES['BAD_REQUEST'])

    def test_confirm_already_confirmed_topup(self):
        reference = self.create_reference(150)
        TestHelpers.expect_success_response(self.topup_api.confirm_topup(reference))

        second = self.topup_api.confirm_topup(reference)
        TestHelpers.expect_error_response(second, RESPONSE_CODES['BAD_REQUEST'])

    def test_large_topup_amount(self):
        self.assertTrue(self.create_reference(1000000))

    def test_reference_format(self):
        self.assertRegex(self.create_reference(), r'^[A-Z0-9-]+$')

    def test_create_multiple_topups_concurrently(self):
        calls = [
            lambda amount=amount: self.topup_api.create_topup(TopupCreate(amount=amount, wallet_id=self.wallet_id))
            for amount in (100, 150, 200)
        ]

        outcomes = fan_out(calls)

        references = []
        for outcome in outcomes:
            body = TestHelpers.expect_success_response(outcome.unwrap())
            references.append(body['reference'])
        # uniqueness is checked on the joined set, never on completion order
        self.assertEqual(len(set(references)), 3)


if __name__ == '__main__':
    unittest.main()
