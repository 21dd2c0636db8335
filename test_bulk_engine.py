#!/usr/bin/env python3
"""
Tests for the bulk mutation engine.
"""

import unittest
from unittest.mock import Mock

from dns_record_tools.core.bulk_engine import BulkMutationEngine
from dns_record_tools.providers.dns_client import DirectoryClient
from dns_record_tools.utils.errors import ConflictError, InputInvalidError

ZONE_ID = "zone-1"


def created(fields):
    record = dict(fields)
    record.setdefault("id", f"id-{fields['name']}")
    record.setdefault("ttl", 1)
    return record


class TestBulkCreate(unittest.TestCase):
    """Test ordered creates with per-item failure containment."""

    def setUp(self):
        """Set up test fixtures."""
        self.client = DirectoryClient(
            {
                "default_provider": "memory",
                "directory_providers": {
                    "memory": {"zones": [{"id": ZONE_ID, "name": "example.com"}]}
                },
            }
        )
        self.engine = BulkMutationEngine(self.client)

    def test_invalid_item_does_not_stop_the_batch(self):
        items = [
            {"type": "A", "name": "one", "content": "192.0.2.1"},
            {"type": "TXT", "name": "two", "content": ""},
            {"type": "A", "name": "three", "content": "192.0.2.3"},
            {"type": "CNAME", "name": "four", "content": "example.com", "proxied": True},
        ]

        output = self.engine.create_records(ZONE_ID, items)

        self.assertEqual((output["created"], output["failed"], output["total"]), (3, 1, 4))
        self.assertEqual([r["index"] for r in output["results"]], [0, 1, 2, 3])
        self.assertEqual([r["success"] for r in output["results"]], [True, False, True, True])
        self.assertTrue(output["results"][1]["error"].startswith("Invalid record:"))
        self.assertNotIn("record", output["results"][1])
        self.assertEqual(output["results"][3]["record"]["name"], "four.example.com")
        self.assertEqual(len(self.client.list_records(ZONE_ID)), 3)

    def test_directory_rejection_is_recorded(self):
        items = [
            {"type": "A", "name": "dup", "content": "192.0.2.1"},
            {"type": "A", "name": "dup", "content": "192.0.2.1"},
        ]

        output = self.engine.create_records(ZONE_ID, items)

        self.assertEqual((output["created"], output["failed"]), (1, 1))
        self.assertTrue(output["results"][1]["error"].startswith("Error (409 Conflict)"))

    def test_non_mapping_item(self):
        output = self.engine.create_records(ZONE_ID, ["not a record"])

        self.assertFalse(output["results"][0]["success"])
        self.assertIn("mapping", output["results"][0]["error"])

    def test_batch_size_limits(self):
        with self.assertRaises(InputInvalidError):
            self.engine.create_records(ZONE_ID, [])
        with self.assertRaises(InputInvalidError):
            self.engine.create_records(
                ZONE_ID, [{"type": "TXT", "name": f"h{i}", "content": "x"} for i in range(101)]
            )
        self.assertEqual(self.client.list_records(ZONE_ID), [])

    def test_exactly_one_hundred_items(self):
        items = [{"type": "TXT", "name": f"h{i}", "content": "x"} for i in range(100)]

        output = self.engine.create_records(ZONE_ID, items)

        self.assertEqual(output["created"], 100)

    def test_zone_id_required(self):
        with self.assertRaises(InputInvalidError):
            self.engine.create_records("", [{"type": "TXT", "name": "a", "content": "x"}])


class TestBulkCreateOrdering(unittest.TestCase):
    """Test the engine against a Directory that fails one call."""

    def test_failure_in_the_middle_keeps_earlier_and_later_results(self):
        client = Mock()
        client.create_record.side_effect = [
            created({"type": "A", "name": "h0.example.com"}),
            created({"type": "A", "name": "h1.example.com"}),
            created({"type": "A", "name": "h2.example.com"}),
            ConflictError("record already exists"),
            created({"type": "A", "name": "h4.example.com"}),
        ]
        engine = BulkMutationEngine(client)
        items = [{"type": "A", "name": f"h{i}", "content": f"192.0.2.{i + 1}"} for i in range(5)]

        output = engine.create_records(ZONE_ID, items)

        self.assertEqual((output["created"], output["failed"], output["total"]), (4, 1, 5))
        self.assertEqual(client.create_record.call_count, 5)
        self.assertEqual(
            [result["success"] for result in output["results"]], [True, True, True, False, True]
        )
        self.assertIn("record already exists", output["results"][3]["error"])
        sent_names = [call.args[1]["name"] for call in client.create_record.call_args_list]
        self.assertEqual(sent_names, ["h0", "h1", "h2", "h3", "h4"])

    def test_unexpected_exception_is_contained(self):
        client = Mock()
        client.create_record.side_effect = [RuntimeError("boom"), created({"type": "TXT", "name": "b"})]
        engine = BulkMutationEngine(client)

        output = engine.create_records(
            ZONE_ID,
            [{"type": "TXT", "name": "a", "content": "x"}, {"type": "TXT", "name": "b", "content": "y"}],
        )

        self.assertEqual(output["results"][0], {"index": 0, "success": False, "error": "Error: boom"})
        self.assertTrue(output["results"][1]["success"])


class TestBulkUpdate(unittest.TestCase):
    """Test ordered partial updates."""

    def setUp(self):
        """Set up test fixtures."""
        self.client = DirectoryClient(
            {
                "default_provider": "memory",
                "directory_providers": {
                    "memory": {
                        "zones": [
                            {
                                "id": ZONE_ID,
                                "name": "example.com",
                                "records": [
                                    {"id": "r1", "type": "A", "name": "a", "content": "192.0.2.1"},
                                    {"id": "r2", "type": "TXT", "name": "t", "content": "x"},
                                ],
                            }
                        ]
                    }
                },
            }
        )
        self.engine = BulkMutationEngine(self.client)

    def test_updates(self):
        output = self.engine.update_records(
            ZONE_ID,
            [
                {"record_id": "r1", "content": "192.0.2.99", "proxied": True},
                {"content": "no id"},
                {"record_id": "r2"},
                {"record_id": "r2", "proxied": True},
                {"record_id": "r2", "ttl": 120},
            ],
        )

        self.assertEqual((output["updated"], output["failed"], output["total"]), (2, 3, 5))
        results = output["results"]
        self.assertEqual(results[0]["record_id"], "r1")
        self.assertTrue(results[0]["record"]["proxied"])
        self.assertEqual(results[1]["error"], "Invalid update: record_id is required")
        self.assertIn("No fields to update", results[2]["error"])
        self.assertTrue(results[3]["error"].startswith("Error (400 Bad Request)"))
        self.assertEqual(results[4]["record"]["ttl"], 120)
        self.assertEqual(self.client.get_record(ZONE_ID, "r1")["content"], "192.0.2.99")

    def test_proxied_flag_rejected_on_non_proxiable_type(self):
        output = self.engine.update_records(ZONE_ID, [{"record_id": "r2", "proxied": False}])

        self.assertEqual((output["updated"], output["failed"]), (0, 1))
        self.assertTrue(output["results"][0]["error"].startswith("Error (400 Bad Request)"))
        self.assertNotIn("proxied", self.client.get_record(ZONE_ID, "r2"))


if __name__ == "__main__":
    unittest.main()
