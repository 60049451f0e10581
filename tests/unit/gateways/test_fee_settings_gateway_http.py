import unittest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

from rental_engine.application.services.fee_settings_provider import FeeSettingsProvider
from rental_engine.domain.entities.fee_settings import FeeSettings, WorkingHours
from rental_engine.domain.errors import TransientError
from rental_engine.infrastructure.gateways.fee_settings_gateway_http import FeeSettingsGatewayHTTP

DEFAULTS = FeeSettings(
    location_fees={
        "Our Office": Decimal("0"),
        "Chisinau Airport": Decimal("50"),
        "Iasi Airport": Decimal("150"),
    },
    outside_hours_fee=Decimal("20"),
    working_hours=WorkingHours(start=9, end=17),
)


class TestFeeSettingsGatewayHTTP(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.gateway = FeeSettingsGatewayHTTP(base_url="http://rental.test/api", defaults=DEFAULTS)

    def _mock_get(self, mock_client_cls, status_code, body):
        mock_resp = MagicMock()
        mock_resp.status_code = status_code
        mock_resp.is_success = 200 <= status_code < 300
        mock_resp.json.return_value = body

        mock_client = AsyncMock()
        mock_client.__aenter__.return_value = mock_client
        mock_client.get.return_value = mock_resp
        mock_client_cls.return_value = mock_client
        return mock_client

    @patch("httpx.AsyncClient")
    async def test_remote_values_override_defaults(self, mock_client_cls):
        mock_client = self._mock_get(
            mock_client_cls,
            200,
            {"chisinau_airport_pickup": "35.50", "outside_hours_fee": 25, "unrelated_fee": 99},
        )

        settings = await self.gateway.fetch()

        self.assertEqual(settings.location_fee("Chisinau Airport"), Decimal("35.50"))
        self.assertEqual(settings.location_fee("Iasi Airport"), Decimal("150"))
        self.assertEqual(settings.outside_hours_fee, Decimal("25"))
        self.assertEqual(settings.working_hours, WorkingHours(start=9, end=17))

        args, _ = mock_client.get.call_args
        self.assertEqual(args[0], "http://rental.test/api/fee-settings/public")

    def test_negative_or_garbage_amounts_keep_defaults(self):
        settings = self.gateway.parse(
            {"office_pickup": -5, "iasi_airport_pickup": "n/a", "outside_hours_fee": None}
        )

        self.assertEqual(settings.location_fee("Our Office"), Decimal("0"))
        self.assertEqual(settings.location_fee("Iasi Airport"), Decimal("150"))
        self.assertEqual(settings.outside_hours_fee, Decimal("20"))

    @patch("httpx.AsyncClient")
    async def test_client_error_is_transient(self, mock_client_cls):
        self._mock_get(mock_client_cls, 404, {"error": "not found"})

        with self.assertRaises(TransientError):
            await self.gateway.fetch()

    @patch("httpx.AsyncClient")
    async def test_provider_keeps_defaults_when_api_is_down(self, mock_client_cls):
        self._mock_get(mock_client_cls, 500, {"error": "boom"})
        provider = FeeSettingsProvider(DEFAULTS, self.gateway)

        current = await provider.refresh()

        self.assertIs(current, DEFAULTS)
