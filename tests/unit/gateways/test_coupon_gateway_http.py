import unittest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import httpx

from rental_engine.domain.errors import TransientError
from rental_engine.infrastructure.circuit_breaker import coupon_breaker
from rental_engine.infrastructure.gateways.coupon_gateway_http import CouponGatewayHTTP


def _response(status_code, body=None, text=""):
    mock_resp = MagicMock()
    mock_resp.status_code = status_code
    mock_resp.is_success = 200 <= status_code < 300
    mock_resp.text = text
    if body is None:
        mock_resp.json.side_effect = ValueError("no json")
    else:
        mock_resp.json.return_value = body
    return mock_resp


def _client(mock_client_cls, *responses):
    mock_client = AsyncMock()
    mock_client.__aenter__.return_value = mock_client
    mock_client.get.side_effect = list(responses)
    mock_client_cls.return_value = mock_client
    return mock_client


class TestCouponGatewayHTTP(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.gateway = CouponGatewayHTTP(base_url="http://rental.test/api/")

    @patch("httpx.AsyncClient")
    async def test_redemption_code_bound_to_phone(self, mock_client_cls):
        mock_client = _client(
            mock_client_cls,
            _response(200, {"valid": True, "coupon": {"code": "WHEEL-5", "discount_percentage": "15"}}),
        )

        result = await self.gateway.validate("WHEEL-5", "+37369123456")

        self.assertTrue(result.valid)
        self.assertEqual(result.discount_percentage, Decimal("15"))
        self.assertEqual(result.phone, "+37369123456")

        args, kwargs = mock_client.get.call_args
        self.assertEqual(args[0], "http://rental.test/api/coupons/validate-redemption/WHEEL-5")
        self.assertEqual(kwargs["params"], {"phone": "+37369123456"})
        self.assertEqual(mock_client.get.await_count, 1)

    @patch("httpx.AsyncClient")
    async def test_unknown_redemption_code_falls_back_to_plain_coupon(self, mock_client_cls):
        mock_client = _client(
            mock_client_cls,
            _response(200, {"valid": False, "message": "coupons.invalid_code"}),
            _response(200, {"valid": True, "free_days": "2"}),
        )

        result = await self.gateway.validate("SUMMER", "+37369123456")

        self.assertTrue(result.valid)
        self.assertEqual(result.free_days, 2)
        self.assertIsNone(result.discount_percentage)
        args, _ = mock_client.get.call_args
        self.assertEqual(args[0], "http://rental.test/api/coupons/validate/SUMMER")

    @patch("httpx.AsyncClient")
    async def test_other_redemption_rejection_does_not_fall_back(self, mock_client_cls):
        mock_client = _client(
            mock_client_cls,
            _response(200, {"valid": False, "message": "coupons.already_used_with_phone"}),
        )

        result = await self.gateway.validate("WHEEL-5", "+37369123456")

        self.assertFalse(result.valid)
        self.assertEqual(result.message, "coupons.already_used_with_phone")
        self.assertEqual(mock_client.get.await_count, 1)

    @patch("httpx.AsyncClient")
    async def test_client_error_body_maps_error_to_message(self, mock_client_cls):
        _client(
            mock_client_cls,
            _response(404, {"error": "coupons.invalid_code"}),
            _response(400, {"error": "coupons.expired"}),
        )

        result = await self.gateway.validate("OLD", "+37369123456")

        self.assertFalse(result.valid)
        self.assertEqual(result.message, "coupons.expired")

    @patch("httpx.AsyncClient")
    async def test_code_is_url_encoded(self, mock_client_cls):
        mock_client = _client(mock_client_cls, _response(200, {"valid": True, "discount_percentage": 5}))

        await self.gateway.validate(" A B/1 ", None)

        args, kwargs = mock_client.get.call_args
        self.assertEqual(args[0], "http://rental.test/api/coupons/validate-redemption/A%20B%2F1")
        self.assertIsNone(kwargs["params"])

    @patch("httpx.AsyncClient")
    async def test_non_json_answer_is_an_invalid_coupon(self, mock_client_cls):
        _client(mock_client_cls, _response(200, None, text="Coupon has expired"))

        result = await self.gateway.validate("OLD", "+37369123456")

        self.assertFalse(result.valid)
        self.assertEqual(result.message, "Coupon has expired")

    @patch("httpx.AsyncClient")
    async def test_server_error_is_transient(self, mock_client_cls):
        _client(mock_client_cls, _response(503, {"error": "maintenance"}))

        with self.assertRaises(TransientError):
            await self.gateway.validate("SAVE10", "+37369123456")

    @patch("httpx.AsyncClient")
    async def test_timeout_is_transient(self, mock_client_cls):
        mock_client = AsyncMock()
        mock_client.__aenter__.return_value = mock_client
        mock_client.get.side_effect = httpx.ReadTimeout("timed out")
        mock_client_cls.return_value = mock_client

        with self.assertRaises(TransientError) as ctx:
            await self.gateway.validate("SAVE10", "+37369123456")

        self.assertIn("timeout", ctx.exception.message)

    @patch("httpx.AsyncClient")
    async def test_rejections_do_not_open_the_circuit(self, mock_client_cls):
        for _ in range(coupon_breaker.fail_max + 1):
            _client(mock_client_cls, _response(200, {"valid": False, "message": "coupons.expired"}))
            result = await self.gateway.validate("OLD", "+37369123456")
            self.assertFalse(result.valid)

        self.assertEqual(coupon_breaker.current_state, "closed")
