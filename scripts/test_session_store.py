import json
import os
import tempfile
import unittest

from medilog.models.user import Role, User
from medilog.services.session_store import JsonFileStore, MemoryStore, SessionManager, SessionStore


class TestSessionStore(unittest.TestCase):
    def test_save_load_clear(self):
        store = MemoryStore()
        session = SessionStore(store)
        user = User(id="u1", name="Ann", email="ann@example.com", role=Role.PATIENT)

        session.save(user)
        self.assertEqual(session.current, user)

        # A fresh session over the same store picks it up at startup
        restored = SessionStore(store)
        self.assertEqual(restored.load(), user)

        restored.clear()
        self.assertIsNone(restored.current)
        self.assertIsNone(store.get("medilog-user"))

    def test_corrupt_value_is_no_session(self):
        store = MemoryStore()
        store.set("medilog-user", "{not json")
        self.assertIsNone(SessionStore(store).load())

    def test_unknown_role_is_no_session(self):
        store = MemoryStore()
        store.set("medilog-user", json.dumps({"id": "u1", "name": "", "email": "", "role": "doctor"}))
        self.assertIsNone(SessionStore(store).load())


class TestSessionManager(unittest.TestCase):
    def setUp(self):
        self.store = MemoryStore()
        self.sessions = SessionManager(self.store)
        self.user = User(id="u1", name="Ann", email="ann@example.com", role=Role.PATIENT)

    def test_tokens_key_separate_sessions(self):
        token = self.sessions.new_token()
        self.sessions.open(token).save(self.user)

        self.assertEqual(self.sessions.open(token).current, self.user)
        self.assertIsNone(self.sessions.open(self.sessions.new_token()).current)
        self.assertIsNotNone(self.store.get(f"medilog-user:{token}"))

    def test_no_token_is_never_persisted(self):
        session = self.sessions.open(None)
        self.assertIsNone(session.current)
        session.save(self.user)
        self.assertIsNone(self.store.get("medilog-user"))
        self.assertIsNone(self.sessions.open(None).current)

    def test_clear_removes_only_that_session(self):
        first, second = self.sessions.new_token(), self.sessions.new_token()
        self.assertNotEqual(first, second)
        self.sessions.open(first).save(self.user)
        self.sessions.open(second).save(self.user)

        self.sessions.open(first).clear()
        self.assertIsNone(self.sessions.open(first).current)
        self.assertEqual(self.sessions.open(second).current, self.user)


class TestJsonFileStore(unittest.TestCase):
    def setUp(self):
        fd, self.path = tempfile.mkstemp(suffix=".json")
        os.close(fd)
        os.remove(self.path)

    def tearDown(self):
        if os.path.exists(self.path):
            os.remove(self.path)

    def test_persists_across_instances(self):
        JsonFileStore(self.path).set("medilog-user", "value")
        self.assertEqual(JsonFileStore(self.path).get("medilog-user"), "value")

        JsonFileStore(self.path).delete("medilog-user")
        self.assertIsNone(JsonFileStore(self.path).get("medilog-user"))

    def test_missing_file(self):
        self.assertIsNone(JsonFileStore(self.path).get("anything"))


if __name__ == '__main__':
    unittest.main()
