"""Wallet API tests."""

import unittest

import pytest

from fintech_contract.data import RESPONSE_CODES, TEST_DATA
from fintech_contract.endpoints import WalletAPI
from fintech_contract.helpers import TestHelpers, ValidationHelpers
from fintech_contract.models import DepositRequest, WalletCreate

WALLET_FIELDS = ['id', 'asset', 'name', 'balance', 'is_safe']


class TestWalletAPI(unittest.TestCase):

    @pytest.fixture(autouse=True)
    def _client(self, authenticated_client):
        self.wallet_api = WalletAPI(authenticated_client)

    def test_get_wallets(self):
        wallets = TestHelpers.validate_array_response(
            self.wallet_api.get_wallets(), WALLET_FIELDS, items_key='wallets')
        self.assertGreater(len(wallets), 0)

    def test_create_wallet(self):
        response = self.wallet_api.create_wallet(TEST_DATA['wallet']['valid_wallet'])
        body = TestHelpers.expect_success_response(response, RESPONSE_CODES['CREATED'])

        self.assertEqual(body['wallet']['asset'], 'USD')
        self.assertEqual(body['wallet']['name'], 'Test Wallet')
        self.assertEqual(body['wallet']['balance'], 0)

    def test_create_gold_wallet_with_safe_flag(self):
        response = self.wallet_api.create_wallet(TEST_DATA['wallet']['gold_wallet'])
        body = TestHelpers.expect_success_response(response, RESPONSE_CODES['CREATED'])

        self.assertEqual(body['wallet']['asset'], 'XAU')
        self.assertTrue(body['wallet']['is_safe'])

    def test_create_wallet_with_invalid_asset(self):
        response = self.wallet_api.create_wallet(WalletCreate(asset='INVALID', name='Invalid Wallet'))
        TestHelpers.expect_error_response(response, RESPONSE_CODES['BAD_REQUEST'])

    def test_create_wallet_without_required_fields(self):
        response = self.wallet_api.create_wallet({'asset': 'USD'})
        TestHelpers.expect_error_response(response, RESPONSE_CODES['BAD_REQUEST'])

    def test_deposit(self):
        response = self.wallet_api.deposit(DepositRequest(amount=100, asset='USD'))
        body = TestHelpers.expect_success_response(response)
        self.assertIn('message', body)

    def test_deposit_with_invalid_amount(self):
        response = self.wallet_api.deposit(DepositRequest(amount=-100, asset='USD'))
        TestHelpers.expect_error_response(response, RESPONSE_CODES['BAD_REQUEST'])

    def test_deposit_with_invalid_asset(self):
        response = self.wallet_api.deposit(DepositRequest(amount=100, asset='INVALID'))
        TestHelpers.expect_error_response(response, RESPONSE_CODES['BAD_REQUEST'])

    def test_delete_wallet(self):
        created = TestHelpers.expect_success_response(
            self.wallet_api.create_wallet(WalletCreate(asset='XAG', name='Wallet To Delete')),
            RESPONSE_CODES['CREATED'])
        wallet_id = created['wallet']['id']

        TestHelpers.expect_success_response(self.wallet_api.delete_wallet(wallet_id))

        wallets = TestHelpers.validate_array_response(self.wallet_api.get_wallets(), items_key='wallets')
        self.assertNotIn(wallet_id, [w['id'] for w in wallets])

    def test_delete_non_existent_wallet(self):
        TestHelpers.expect_error_response(self.wallet_api.delete_wallet(99999), RESPONSE_CODES['NOT_FOUND'])

    def test_wallet_data_structure(self):
        wallets = TestHelpers.validate_array_response(self.wallet_api.get_wallets(), items_key='wallets')
        for wallet in wallets:
            self.assertTrue(ValidationHelpers.validate_wallet_data(wallet))
            self.assertIsInstance(wallet['balance'], (int, float))
            self.assertIsInstance(wallet['is_safe'], bool)


if __name__ == '__main__':
    unittest.main()
