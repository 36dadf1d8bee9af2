"""
core/tests/test_app_context.py

Wiring of the runtime context against a temporary database.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from authentication.models.auth_state import GateState
from core.common.app_context import AppContext
from core.config.config_service import ConfigService
from core.settings.logic.settings_manager import StoreKeys


class TestAppContext(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        root = Path(self._tmp.name)
        machine = root / "machine.ini"
        machine.write_text(
            "[Database]\n"
            f"app_store = {(root / 'app.db').as_posix()}\n"
            "[Contracts]\nsample_count = 5\n"
            "[Security]\nbcrypt_rounds = 4\n",
            encoding="utf-8",
        )
        cfg = ConfigService(machine_ini=machine, user_ini=root / "user.ini", environ={})
        self.ctx = AppContext(cfg)
        self.ctx.start()

    def tearDown(self) -> None:
        self.ctx.shutdown()
        self._tmp.cleanup()

    def test_fresh_install(self) -> None:
        self.assertEqual(self.ctx.gate.state, GateState.FIRST_LAUNCH)
        self.assertEqual(len(self.ctx.contract_store), 5)
        self.assertFalse(self.ctx.onboarding_complete)

    def test_store_blob_is_encrypted(self) -> None:
        blob = self.ctx.settings_manager.get(StoreKeys.SAVED_CONTRACTS)
        self.assertIsInstance(blob, bytes)
        self.assertNotEqual(blob.lstrip()[:1], b"[")

    def test_onboarding_flag(self) -> None:
        self.ctx.complete_onboarding()
        self.assertTrue(self.ctx.onboarding_complete)

    def test_reset_all_data_keeps_pin(self) -> None:
        self.ctx.gate.create_pin("1234")
        self.ctx.reset_all_data()
        self.assertEqual(len(self.ctx.contract_store), 0)
        self.assertIsNone(self.ctx.settings_manager.get(StoreKeys.SAVED_CONTRACTS))
        self.assertTrue(self.ctx.gate.config.has_pin)

    def test_reset_all_data_rotates_store_key(self) -> None:
        old_key = self.ctx.settings_manager.get(StoreKeys.STORE_KEY)
        result = self.ctx.reset_all_data()
        self.assertTrue(result.success)
        self.assertNotEqual(self.ctx.settings_manager.get(StoreKeys.STORE_KEY), old_key)
        self.assertEqual(self.ctx.settings_manager.get(StoreKeys.STORE_KEY_RING), [old_key])

        self.ctx.contract_store.load()
        self.assertEqual(len(self.ctx.contract_store), 5)

    def test_onboarding_can_be_shown_again(self) -> None:
        self.ctx.complete_onboarding()
        self.ctx.reset_onboarding()
        self.assertFalse(self.ctx.onboarding_complete)


if __name__ == "__main__":
    unittest.main()
