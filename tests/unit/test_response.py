"""Unit tests for the APIResponse envelope."""

import unittest
from types import SimpleNamespace

from fintech_contract.api_client import APIResponse, ResponseParseError


class TestAPIResponse(unittest.TestCase):

    def test_from_requests_style_response(self):
        raw = SimpleNamespace(status_code=201, headers={'X-Id': '1'}, text='{"id": 1}', reason='Created')
        response = APIResponse.from_transport(raw)
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.reason, 'Created')
        self.assertEqual(response.headers, {'X-Id': '1'})
        self.assertEqual(response.json(), {'id': 1})

    def test_from_httpx_style_response(self):
        raw = SimpleNamespace(status_code=404, headers={}, text='{}', reason_phrase='Not Found')
        self.assertEqual(APIResponse.from_transport(raw).reason, 'Not Found')

    def test_ok_covers_2xx_only(self):
        self.assertTrue(APIResponse(200, {}).ok)
        self.assertTrue(APIResponse(299, {}).ok)
        self.assertFalse(APIResponse(199, {}).ok)
        self.assertFalse(APIResponse(400, {}).ok)

    def test_json_is_parsed_once(self):
        response = APIResponse(200, {}, text='[1, 2]')
        self.assertIs(response.json(), response.json())

    def test_invalid_json_raises_parse_error(self):
        response = APIResponse(502, {}, text='<html>Bad Gateway</html>')
        with self.assertRaises(ResponseParseError) as ctx:
            response.json()
        self.assertEqual(ctx.exception.status_code, 502)
        self.assertIn('Bad Gateway', ctx.exception.body_preview)

    def test_parse_error_is_a_value_error(self):
        with self.assertRaises(ValueError):
            APIResponse(200, {}, text='').json()

    def test_data_falls_back_to_text(self):
        self.assertEqual(APIResponse(200, {}, text='<div></div>').data, '<div></div>')
        self.assertEqual(APIResponse(200, {}, text='{"a": 1}').data, {'a': 1})


if __name__ == '__main__':
    unittest.main()
