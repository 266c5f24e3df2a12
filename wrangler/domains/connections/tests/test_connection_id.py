"""Unit tests for connection id derivation."""

import re

import pytest

from wrangler.domains.connections.store import ConnectionStore, get_connection_id

_VALID_ID = re.compile(r"^[a-z0-9_]*$")

NAMES = [
    "My DB!",
    "  padded name\t",
    "already_normal_123",
    "Kafka: orders/events",
    "ÜNÏCÖDÉ näme",
    "emoji 🚀 conn",
    "",
    "   ",
    "MiXeD-CaSe.Name",
]


class TestGetConnectionId:
    """Tests for get_connection_id."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("My DB!", "my_db_"),
            ("my db!", "my_db_"),
            ("  Sales Warehouse  ", "sales_warehouse"),
            ("prod-postgres.eu", "prod_postgres_eu"),
            ("already_normal_123", "already_normal_123"),
            ("", ""),
            ("   ", ""),
        ],
    )
    def test_examples(self, name, expected):
        assert get_connection_id(name) == expected

    @pytest.mark.parametrize("name", NAMES)
    def test_only_lowercase_alnum_and_underscore(self, name):
        assert _VALID_ID.match(get_connection_id(name))

    @pytest.mark.parametrize("name", NAMES)
    def test_stable_across_calls(self, name):
        assert get_connection_id(name) == get_connection_id(name)

    @pytest.mark.parametrize("name", NAMES)
    def test_noop_on_normalized_id(self, name):
        once = get_connection_id(name)

        assert get_connection_id(once) == once

    def test_inner_whitespace_is_replaced_not_collapsed(self):
        assert get_connection_id("a  b") == "a__b"

    def test_exposed_on_store(self):
        assert ConnectionStore.get_connection_id("My DB!") == "my_db_"
