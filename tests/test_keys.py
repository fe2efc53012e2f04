"""Tests for composite key construction, parsing and prefix scans."""
import pytest

from claimledger.core.errors import EncodingError
from claimledger.ledger.keys import build_key, key_range, parse_key, scan
from claimledger.ledger.stub import Transaction


class TestBuildAndParse:
    def test_build_key_layout(self):
        assert build_key("claim", ["k1", "c1"]) == "\x00claim\x00k1\x00c1\x00"

    def test_parse_recovers_prefix_and_attrs(self):
        assert parse_key(build_key("contract", ["alice", "k1"])) == ("contract", ["alice", "k1"])

    def test_parse_key_without_attributes(self):
        assert parse_key(build_key("repair_order")) == ("repair_order", [])

    def test_separator_in_attribute_is_rejected(self):
        with pytest.raises(EncodingError):
            build_key("user", ["bad\x00name"])

    def test_empty_prefix_is_rejected(self):
        with pytest.raises(EncodingError):
            build_key("", ["x"])

    @pytest.mark.parametrize("key", ["claim\x00k1\x00", "\x00claim\x00k1", "", "\x00\x00"])
    def test_malformed_keys(self, key):
        with pytest.raises(EncodingError):
            parse_key(key)


class TestScan:
    def _tx(self, keys):
        return Transaction({key: b"{}" for key in keys})

    def test_scan_is_bounded_by_prefix(self):
        tx = self._tx([
            build_key("contract", ["alice", "k1"]),
            build_key("contract_type", ["ct1"]),
            build_key("claim", ["k1", "c1"]),
        ])
        keys = [key for key, _ in scan(tx, "contract")]
        assert keys == [build_key("contract", ["alice", "k1"])]

    def test_scan_by_leading_attribute(self):
        tx = self._tx([
            build_key("contract", ["alice", "k2"]),
            build_key("contract", ["alice", "k1"]),
            build_key("contract", ["alicia", "k3"]),
            build_key("contract", ["bob", "k4"]),
        ])
        keys = [parse_key(key)[1] for key, _ in scan(tx, "contract", ["alice"])]
        assert keys == [["alice", "k1"], ["alice", "k2"]]

    def test_scan_is_restartable(self):
        tx = self._tx([build_key("user", ["a"]), build_key("user", ["b"])])
        assert list(scan(tx, "user")) == list(scan(tx, "user"))

    def test_key_range_end_sorts_after_every_child(self):
        start, end = key_range("claim", ["k1"])
        assert start < build_key("claim", ["k1", "zzz"]) < end
