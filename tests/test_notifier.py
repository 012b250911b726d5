import sys
import os
import json
import unittest

import httpx

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from core.config import Settings
from embeds.models import DisplayEmbed, EmbedField, WebhookMessage
from notifier.discord_notifier import DiscordWebhookNotifier


def _message() -> WebhookMessage:
    embed = DisplayEmbed(
        title=" Incident: API outage",
        url="https://status.example.com/incident/inc_123",
        color=0x2483C5,
        fields=[EmbedField(name="investigating (03:04:05z)", value="Looking into it.")],
    )
    return WebhookMessage(content="<@&42>", embeds=[embed])


class TestDiscordWebhookNotifier(unittest.TestCase):

    def setUp(self):
        self.settings = Settings(webhook_id="111", webhook_token="tok-secret", timeout=2.5)
        self.requests = []

    def _notifier(self, handler) -> DiscordWebhookNotifier:
        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)
        return DiscordWebhookNotifier(self.settings, transport=httpx.MockTransport(record))

    def test_successful_delivery(self):
        notifier = self._notifier(lambda request: httpx.Response(204))

        result = notifier.send(_message())

        self.assertTrue(result.ok)
        self.assertEqual(result.status_code, 204)
        self.assertEqual(len(self.requests), 1)

        request = self.requests[0]
        self.assertEqual(request.method, "POST")
        self.assertEqual(str(request.url), "https://discord.com/api/v10/webhooks/111/tok-secret")

        body = json.loads(request.content)
        self.assertEqual(body["content"], "<@&42>")
        self.assertEqual(body["embeds"][0]["title"], " Incident: API outage")
        self.assertEqual(body["embeds"][0]["fields"][0]["value"], "Looking into it.")

    def test_configured_timeout_reaches_the_request(self):
        notifier = self._notifier(lambda request: httpx.Response(204))

        notifier.send(_message())

        timeout = self.requests[0].extensions["timeout"]
        self.assertEqual(timeout["connect"], 2.5)
        self.assertEqual(timeout["read"], 2.5)
        self.assertEqual(timeout["write"], 2.5)
        self.assertEqual(timeout["pool"], 2.5)

    def test_custom_api_base(self):
        self.settings = Settings(webhook_id="1", webhook_token="t", api_base="http://fake.local/api")
        notifier = self._notifier(lambda request: httpx.Response(200, json={"id": "m1"}))

        self.assertTrue(notifier.send(_message()).ok)
        self.assertEqual(str(self.requests[0].url), "http://fake.local/api/webhooks/1/t")

    def test_http_error_is_a_failed_result(self):
        notifier = self._notifier(
            lambda request: httpx.Response(429, json={"message": "You are being rate limited."})
        )

        result = notifier.send(_message())

        self.assertFalse(result.ok)
        self.assertEqual(result.status_code, 429)
        self.assertIn("429", result.message)
        # Exactly one attempt, never retried.
        self.assertEqual(len(self.requests), 1)

    def test_timeout_is_a_failed_result(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        result = self._notifier(handler).send(_message())

        self.assertFalse(result.ok)
        self.assertIsNone(result.status_code)
        self.assertIn("timed out", result.message)

    def test_connection_error_is_a_failed_result(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        result = self._notifier(handler).send(_message())

        self.assertFalse(result.ok)
        self.assertIn("ConnectError", result.message)

    def test_missing_credentials_skip_the_call(self):
        self.settings = Settings(webhook_id="111")
        notifier = self._notifier(lambda request: httpx.Response(204))

        result = notifier.send(_message())

        self.assertFalse(result.ok)
        self.assertEqual(result.message, "webhook not configured")
        self.assertEqual(self.requests, [])

    def test_token_not_in_logs(self):
        notifier = self._notifier(lambda request: httpx.Response(500, text="oops"))

        with self.assertLogs("status_relay", level="DEBUG") as captured:
            notifier.send(_message())

        self.assertTrue(captured.output)
        for line in captured.output:
            self.assertNotIn("tok-secret", line)


if __name__ == "__main__":
    unittest.main(verbosity=2)
