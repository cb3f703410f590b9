"""Tests for config loading and validation."""

import json
import os
import tempfile
from pathlib import Path
from unittest import TestCase, mock

from fanout.config import DispatchConfig, load_config
from fanout.errors import ConfigError
from tests.fakes import DEST, KEY_A

TOML = f"""
private_keys = ["{KEY_A}"]
rpc_url = "http://node.test:8545"
chain_id = 56
to_address = "{DEST}"
value = 1000000000000000000
gas_limit = 30000
"""


class LoadConfigTests(TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.dir = Path(self._tmp.name)

    def write(self, name: str, text: str) -> Path:
        path = self.dir / name
        path.write_text(text)
        return path

    def test_toml(self) -> None:
        cfg = load_config(self.write("config.toml", TOML))
        self.assertEqual(cfg.private_keys, [KEY_A])
        self.assertEqual(cfg.chain_id, 56)
        self.assertEqual(cfg.value, "1000000000000000000")
        self.assertEqual(cfg.gas_limit, 30000)
        self.assertEqual(cfg.gas_price, "")
        self.assertEqual(cfg.data, "")
        self.assertEqual(cfg.stagger, 0.1)

    def test_json(self) -> None:
        raw = {
            "private_keys": [KEY_A, KEY_A[2:]],
            "rpc_url": "https://bsc-dataseed.binance.org",
            "chain_id": 56,
            "to_address": DEST,
            "value": "0",
            "gas_limit": 21000,
            "gas_price": "",
            "data": "0x01",
        }
        cfg = load_config(self.write("config.json", json.dumps(raw)))
        self.assertEqual(len(cfg.private_keys), 2)
        self.assertEqual(cfg.data, "0x01")

    def test_rpc_url_from_environment(self) -> None:
        path = self.write("config.toml", TOML)
        with mock.patch.dict(os.environ, {"RPC_URL": "http://override:8545"}):
            cfg = load_config(path)
        self.assertEqual(cfg.rpc_url, "http://override:8545")

    def test_missing_file(self) -> None:
        with self.assertRaises(ConfigError):
            load_config(self.dir / "nope.json")

    def test_unparseable(self) -> None:
        with self.assertRaises(ConfigError):
            load_config(self.write("config.json", "{not json"))
        with self.assertRaises(ConfigError):
            load_config(self.write("config.toml", "private_keys = ["))

    def test_required_fields(self) -> None:
        base = {"private_keys": [KEY_A], "rpc_url": "http://node.test", "chain_id": 56, "to_address": DEST}
        cases = {
            "empty key list": {**base, "private_keys": []},
            "empty rpc url": {**base, "rpc_url": ""},
            "empty destination": {**base, "to_address": ""},
            "malformed destination": {**base, "to_address": "0x1234"},
            "negative gas limit": {**base, "gas_limit": -1},
            "missing chain id": {k: v for k, v in base.items() if k != "chain_id"},
        }
        for name, raw in cases.items():
            with self.subTest(name):
                with self.assertRaises(ConfigError):
                    load_config(self.write("config.json", json.dumps(raw)))


class DispatchConfigTests(TestCase):
    def test_literals_are_not_parsed_here(self) -> None:
        # malformed amounts are reported per account by the builder
        cfg = DispatchConfig(private_keys=[KEY_A], rpc_url="http://x", chain_id=1, to_address=DEST, value="1.5")
        self.assertEqual(cfg.value, "1.5")

    def test_integer_gas_price(self) -> None:
        cfg = DispatchConfig(private_keys=[KEY_A], rpc_url="http://x", chain_id=1, to_address=DEST, gas_price=3 * 10**9)
        self.assertEqual(cfg.gas_price, "3000000000")
