"""Storage charge, profile, customer and holiday API tests."""

import unittest

import pytest

from fintech_contract.data import RESPONSE_CODES
from fintech_contract.endpoints import CustomerAPI, HolidayAPI, ProfileAPI, StorageAPI
from fintech_contract.helpers import TestHelpers, ValidationHelpers
from fintech_contract.models import ProfileUpdate

ISO_TIMESTAMP = r'^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}'


class TestProfileAPI(unittest.TestCase):

    @pytest.fixture(autouse=True)
    def _client(self, authenticated_client, test_user):
        self.profile_api = ProfileAPI(authenticated_client)
        self.test_user = test_user

    def test_get_profile(self):
        profile = TestHelpers.validate_response_structure(self.profile_api.get_profile(), ['id', 'email', 'name'])
        self.assertEqual(profile['email'], self.test_user['email'])
        self.assertNotIn('password', profile)
        self.assertTrue(ValidationHelpers.validate_email(profile['email']))

    def test_update_profile(self):
        update = ProfileUpdate(name='Updated Name', avatar='https://example.com/avatar.png')
        profile = TestHelpers.expect_success_response(self.profile_api.update_profile(update))
        self.assertEqual(profile['name'], 'Updated Name')
        self.assertEqual(profile['avatar'], 'https://example.com/avatar.png')

    def test_update_profile_with_partial_data(self):
        profile = TestHelpers.expect_success_response(self.profile_api.update_profile(ProfileUpdate(name='Partial')))
        self.assertEqual(profile['name'], 'Partial')

    def test_update_profile_with_empty_name(self):
        response = self.profile_api.update_profile({'name': ''})
        TestHelpers.expect_error_response(response, RESPONSE_CODES['BAD_REQUEST'])

    def test_update_profile_with_overlong_name(self):
        response = self.profile_api.update_profile(ProfileUpdate(name='a' * 256))
        TestHelpers.expect_error_response(response, RESPONSE_CODES['BAD_REQUEST'])

    def test_update_profile_with_special_characters(self):
        name = "Zoë O'Brien-Tan 测试"
        profile = TestHelpers.expect_success_response(self.profile_api.update_profile(ProfileUpdate(name=name)))
        self.assertEqual(profile['name'], name)


class TestStorageChargesAPI(unittest.TestCase):

    @pytest.fixture(autouse=True)
    def _client(self, authenticated_client):
        self.storage_api = StorageAPI(authenticated_client)

    def test_get_storage_charges(self):
        body = TestHelpers.validate_response_structure(self.storage_api.get_storage_charges(), ['items', 'total'])
        self.assertEqual(body['total'], len(body['items']))

    def test_get_storage_charge_summary(self):
        TestHelpers.validate_response_structure(
            self.storage_api.get_storage_charge_summary(),
            ['total_amount', 'total_charges', 'fiat_deduction_total', 'metal_sale_total'])

    def test_storage_charge_data_structure(self):
        items = TestHelpers.validate_array_response(
            self.storage_api.get_storage_charges(),
            ['id', 'charge_amount', 'storage_charge_type', 'wallet_id', 'wallet_asset'],
            items_key='items')
        for charge in items:
            self.assertIn(charge['storage_charge_type'], ('fiat_deduction', 'metal_sale'))
            self.assertGreaterEqual(charge['charge_amount'], 0)

    def test_summary_matches_charges(self):
        items = TestHelpers.expect_success_response(self.storage_api.get_storage_charges())['items']
        summary = TestHelpers.expect_success_response(self.storage_api.get_storage_charge_summary())
        self.assertEqual(summary['total_charges'], len(items))
        self.assertAlmostEqual(summary['total_amount'],
                               summary['fiat_deduction_total'] + summary['metal_sale_total'], places=2)

    def test_storage_charge_date_formats(self):
        items = TestHelpers.expect_success_response(self.storage_api.get_storage_charges())['items']
        for charge in items:
            self.assertRegex(charge['created_at'], ISO_TIMESTAMP)
            self.assertRegex(charge['processing_date'], ISO_TIMESTAMP)


class TestDirectoryAPI(unittest.TestCase):

    @pytest.fixture(autouse=True)
    def _client(self, authenticated_client):
        self.customer_api = CustomerAPI(authenticated_client)
        self.holiday_api = HolidayAPI(authenticated_client)

    def test_get_customers(self):
        customers = TestHelpers.validate_array_response(self.customer_api.get_customers(), ['id', 'email'])
        self.assertGreater(len(customers), 0)

    def test_get_holidays(self):
        holidays = TestHelpers.validate_array_response(self.holiday_api.get_holidays(), ['date', 'name'])
        for holiday in holidays:
            self.assertRegex(holiday['date'], r'^\d{4}-\d{2}-\d{2}$')


if __name__ == '__main__':
    unittest.main()
