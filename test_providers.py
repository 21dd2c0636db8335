#!/usr/bin/env python3
"""
Tests for the Directory providers, the client wrapper and error mapping.
"""

import os
import tempfile
import threading
import unittest
from unittest.mock import Mock, patch

import requests
import yaml

from dns_record_tools.providers.cloudflare_provider import CloudflareDirectory
from dns_record_tools.providers.dns_client import DirectoryClient, DirectoryHandle
from dns_record_tools.providers.memory_provider import MemoryDirectory
from dns_record_tools.utils.errors import (
    BadRequestError,
    ConfigurationError,
    ConflictError,
    DirectoryConnectionError,
    DirectoryError,
    ForbiddenError,
    NotFoundError,
    RateLimitedError,
    UnauthorizedError,
    describe_error,
    error_for_status,
)


def api_response(status=200, body=None, text=""):
    response = Mock()
    response.status_code = status
    response.ok = status < 400
    response.reason = "Reason"
    response.text = text
    if body is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = body
    return response


class TestCloudflareDirectory(unittest.TestCase):
    """Test the Cloudflare provider against a mocked HTTP session."""

    def setUp(self):
        """Set up test fixtures."""
        self.session = Mock()
        self.session.headers = {}
        self.provider = CloudflareDirectory(
            {"api_token": "secret", "base_url": "https://api.test/v4/", "timeout": 5},
            session=self.session,
        )

    def test_requires_token(self):
        with self.assertRaises(ConfigurationError):
            CloudflareDirectory({"api_token": ""}, session=Mock())

    def test_sets_bearer_header(self):
        self.assertEqual(self.session.headers["Authorization"], "Bearer secret")

    def test_list_records_sends_filters(self):
        self.session.request.return_value = api_response(
            body={"success": True, "result": [{"id": "r1", "type": "A"}]}
        )

        records = self.provider.list_records(
            "z1", {"type": "A", "proxied": True, "name.contains": "www"}, page=2, per_page=100
        )

        self.assertEqual(records, [{"id": "r1", "type": "A"}])
        self.session.request.assert_called_once_with(
            "GET",
            "https://api.test/v4/zones/z1/dns_records",
            timeout=5,
            params={
                "match": "all",
                "page": 2,
                "per_page": 100,
                "type": "A",
                "proxied": "true",
                "name.contains": "www",
            },
        )

    def test_list_zones_follows_pages(self):
        self.session.request.side_effect = [
            api_response(
                body={"success": True, "result": [{"id": "z1"}], "result_info": {"total_pages": 2}}
            ),
            api_response(
                body={"success": True, "result": [{"id": "z2"}], "result_info": {"total_pages": 2}}
            ),
        ]

        zones = self.provider.list_zones({"name": "example"})

        self.assertEqual([zone["id"] for zone in zones], ["z1", "z2"])
        second_params = self.session.request.call_args_list[1].kwargs["params"]
        self.assertEqual(second_params["page"], 2)
        self.assertEqual(second_params["name"], "example")

    def test_create_and_update_use_json_body(self):
        self.session.request.return_value = api_response(
            body={"success": True, "result": {"id": "r1", "type": "A", "name": "a"}}
        )

        self.provider.create_record("z1", {"type": "A", "name": "a", "content": "192.0.2.1"})
        self.provider.update_record("z1", "r1", {"ttl": 300})

        create_call, update_call = self.session.request.call_args_list
        self.assertEqual(create_call.args[0], "POST")
        self.assertEqual(create_call.kwargs["json"]["content"], "192.0.2.1")
        self.assertEqual(update_call.args, ("PATCH", "https://api.test/v4/zones/z1/dns_records/r1"))
        self.assertEqual(update_call.kwargs["json"], {"ttl": 300})

    def test_export_returns_text(self):
        self.session.request.return_value = api_response(text="example.com. 1 IN A 192.0.2.1")

        self.assertEqual(self.provider.export_zone("z1"), "example.com. 1 IN A 192.0.2.1")

    def test_http_errors_map_to_typed_errors(self):
        cases = [
            (400, BadRequestError),
            (401, UnauthorizedError),
            (403, ForbiddenError),
            (404, NotFoundError),
            (409, ConflictError),
            (429, RateLimitedError),
            (500, DirectoryError),
        ]
        for status, error_class in cases:
            with self.subTest(status=status):
                self.session.request.return_value = api_response(
                    status, body={"success": False, "errors": [{"code": 9, "message": "nope"}]}
                )
                with self.assertRaises(error_class) as ctx:
                    self.provider.get_record("z1", "r1")
                self.assertEqual(ctx.exception.status, status)
                self.assertEqual(ctx.exception.message, "nope (code 9)")

    def test_unsuccessful_body(self):
        self.session.request.return_value = api_response(
            body={"success": False, "errors": [{"message": "bad"}]}
        )

        with self.assertRaises(DirectoryError):
            self.provider.get_zone("z1")

    def test_connection_errors(self):
        for exc in (requests.exceptions.Timeout("slow"), requests.exceptions.ConnectionError("down")):
            with self.subTest(exc=exc):
                self.session.request.side_effect = exc
                with self.assertRaises(DirectoryConnectionError):
                    self.provider.get_zone("z1")

    def test_verify_token(self):
        self.session.request.return_value = api_response(
            body={"success": True, "result": {"id": "tok", "status": "active"}}
        )

        self.assertEqual(self.provider.verify_token(), {"id": "tok", "status": "active"})

    def test_inactive_token(self):
        self.session.request.return_value = api_response(
            body={"success": True, "result": {"id": "tok", "status": "disabled"}}
        )

        with self.assertRaises(ConfigurationError):
            self.provider.verify_token()


class TestMemoryDirectory(unittest.TestCase):
    """Test the in-memory provider."""

    def setUp(self):
        """Set up test fixtures."""
        self.provider = MemoryDirectory(
            {
                "zones": [
                    {
                        "id": "z1",
                        "name": "Example.com.",
                        "records": [
                            {"id": "r1", "type": "A", "name": "@", "content": "192.0.2.1"},
                            {"id": "r2", "type": "TXT", "name": "t", "content": "hello world"},
                        ],
                    }
                ]
            }
        )

    def test_seeded_zone(self):
        zone = self.provider.get_zone("z1")

        self.assertEqual(zone["name"], "example.com")
        self.assertEqual(zone["status"], "active")
        self.assertEqual(self.provider.get_record("z1", "r1")["name"], "example.com")

    def test_seed_file(self):
        seed = {"zones": [{"id": "z9", "name": "seeded.net", "records": [{"type": "TXT", "name": "a", "content": "b"}]}]}
        with tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False) as f:
            yaml.safe_dump(seed, f)
            path = f.name
        try:
            provider = MemoryDirectory({"seed_file": path})
        finally:
            os.unlink(path)

        self.assertEqual(len(provider.list_records("z9")), 1)

    def test_list_records_paging(self):
        first = self.provider.list_records("z1", page=1, per_page=1)
        second = self.provider.list_records("z1", page=2, per_page=1)
        third = self.provider.list_records("z1", page=3, per_page=1)

        self.assertEqual(len(first) + len(second), 2)
        self.assertNotEqual(first[0]["id"], second[0]["id"])
        self.assertEqual(third, [])

    def test_returned_records_are_copies(self):
        record = self.provider.get_record("z1", "r1")
        record["content"] = "changed"

        self.assertEqual(self.provider.get_record("z1", "r1")["content"], "192.0.2.1")

    def test_unknown_ids(self):
        with self.assertRaises(NotFoundError):
            self.provider.get_zone("missing")
        with self.assertRaises(NotFoundError):
            self.provider.delete_record("z1", "missing")

    def test_delete(self):
        self.provider.delete_record("z1", "r2")

        self.assertEqual([r["id"] for r in self.provider.list_records("z1")], ["r1"])

    def test_export_zone(self):
        text = self.provider.export_zone("z1")

        self.assertIn(";; Zone: example.com", text)
        self.assertIn("example.com. 1 IN A 192.0.2.1", text)
        self.assertIn('t.example.com. 1 IN TXT "hello world"', text)


class TestDirectoryClient(unittest.TestCase):
    """Test provider selection."""

    def test_memory_provider(self):
        client = DirectoryClient({"default_provider": "memory"})

        self.assertIsInstance(client.provider, MemoryDirectory)

    def test_unknown_provider_falls_back_to_memory(self):
        client = DirectoryClient({"default_provider": "route53"})

        self.assertIsInstance(client.provider, MemoryDirectory)

    @patch.dict(os.environ, {"CLOUDFLARE_API_TOKEN": "from-env"})
    def test_cloudflare_token_from_environment(self):
        client = DirectoryClient({"default_provider": "cloudflare"})

        self.assertIsInstance(client.provider, CloudflareDirectory)
        self.assertEqual(client.provider.api_token, "from-env")


class TestDirectoryHandle(unittest.TestCase):
    """Test once-only client construction."""

    def test_factory_runs_once(self):
        factory = Mock(return_value=object())
        handle = DirectoryHandle(factory)

        self.assertFalse(handle.is_initialized())
        first = handle.get()
        second = handle.get()

        self.assertIs(first, second)
        factory.assert_called_once_with()
        self.assertTrue(handle.is_initialized())

    def test_concurrent_first_use(self):
        calls = []

        def factory():
            calls.append(1)
            return object()

        handle = DirectoryHandle(factory)
        results = []
        threads = [threading.Thread(target=lambda: results.append(handle.get())) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len(calls), 1)
        self.assertEqual(len({id(result) for result in results}), 1)

    def test_failed_factory_is_retried(self):
        factory = Mock(side_effect=[ConfigurationError("no token"), "client"])
        handle = DirectoryHandle(factory)

        with self.assertRaises(ConfigurationError):
            handle.get()
        self.assertFalse(handle.is_initialized())
        self.assertEqual(handle.get(), "client")

    def test_reset(self):
        handle = DirectoryHandle(Mock(side_effect=["first", "second"]))

        self.assertEqual(handle.get(), "first")
        handle.reset()
        self.assertEqual(handle.get(), "second")


class TestErrorDescriptions(unittest.TestCase):
    """Test the messages returned for failures."""

    def test_status_messages(self):
        cases = [
            (400, "Error (400 Bad Request): boom."),
            (401, "Error (401 Unauthorized)"),
            (403, "Error (403 Forbidden)"),
            (404, "Error (404 Not Found): boom."),
            (409, "Error (409 Conflict): boom."),
            (429, "Error (429 Rate Limited)"),
            (502, "Error (502): boom"),
        ]
        for status, prefix in cases:
            with self.subTest(status=status):
                self.assertTrue(describe_error(error_for_status(status, "boom")).startswith(prefix))

    def test_other_errors(self):
        self.assertTrue(
            describe_error(DirectoryConnectionError("refused")).startswith(
                "Error: Could not connect to the Directory API (refused)."
            )
        )
        self.assertEqual(describe_error(DirectoryError("odd")), "Error: odd")
        self.assertEqual(describe_error(KeyError("x")), "Error: 'x'")


if __name__ == "__main__":
    unittest.main()
