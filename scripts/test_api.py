import json
import unittest

from fakes import FakeFirestore, FakeIdentity
from fastapi.testclient import TestClient

from medilog.main import create_app
from medilog.services.assistant import DEFAULT_REPLY, REPLY_RULES, KeywordAssistant
from medilog.services.session_store import MemoryStore, SessionManager

PATIENT = {"name": "Ann", "email": "ann@example.com", "password": "secret1", "role": "patient"}
CAREGIVER = {"name": "Cy", "email": "cy@example.com", "password": "secret1", "role": "caregiver"}


def parse_stream(body: str):
    parts = {}
    for line in body.strip().splitlines():
        kind, _, payload = line.partition(":")
        parts[kind] = json.loads(payload)
    return parts


class ApiTestCase(unittest.TestCase):
    def setUp(self):
        self.db = FakeFirestore()
        self.identity = FakeIdentity()
        self.sessions = SessionManager(MemoryStore())
        self.app = create_app(
            db=self.db,
            identity=self.identity,
            sessions=self.sessions,
            assistant=KeywordAssistant(chat_delay=0, summary_delay=0, flashcard_delay=0),
        )
        self.client = TestClient(self.app)

    def register(self, body=PATIENT, client=None):
        resp = (client or self.client).post("/auth/register", json=body)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def login(self, body, client=None):
        creds = {"email": body["email"], "password": body["password"]}
        resp = (client or self.client).post("/auth/login", json=creds)
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()


class TestAuthRoutes(ApiTestCase):
    def test_register(self):
        data = self.register(CAREGIVER)
        self.assertEqual(data["user"]["role"], "caregiver")
        self.assertEqual(data["redirect"], "/dashboard/caregiver")
        self.assertEqual(self.client.get("/auth/me").json()["user"]["email"], "cy@example.com")

    def test_register_duplicate(self):
        self.register()
        resp = self.client.post("/auth/register", json=PATIENT)
        self.assertEqual(resp.status_code, 401)

    def test_login_missing_profile(self):
        self.identity.create_account("Bob", "bob@example.com", "secret1")
        resp = self.client.post("/auth/login", json={"email": "bob@example.com", "password": "secret1"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["detail"], "User profile not found")
        self.assertIsNone(self.client.get("/auth/me").json()["user"])

    def test_login_redirects_by_stored_role(self):
        self.register(CAREGIVER)
        self.client.post("/auth/logout")
        resp = self.client.post(
            "/auth/login",
            json={"email": "cy@example.com", "password": "secret1", "role": "patient"},
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["redirect"], "/dashboard/caregiver")

    def test_google(self):
        self.identity.add_google_user("tok", "Gail", "gail@example.com")
        resp = self.client.post("/auth/google", json={"id_token": "tok"})
        self.assertEqual(resp.json()["user"]["role"], "patient")
        self.assertEqual(self.client.post("/auth/google", json={"id_token": "bad"}).status_code, 401)

    def test_logout_then_navigate(self):
        self.register()
        resp = self.client.post("/auth/logout")
        self.assertEqual(resp.json(), {"user": None, "redirect": "/", "session_token": None})
        nav = self.client.get("/navigate", params={"path": "/flashcards/review"}).json()
        self.assertEqual(nav["redirect"], "/auth/login")
        self.assertEqual(self.client.get("/reminders/").status_code, 401)

    def test_navigate_signed_in(self):
        self.register()
        nav = self.client.get("/navigate", params={"path": "/auth/login"}).json()
        self.assertEqual(nav["redirect"], "/dashboard/patient")
        nav = self.client.get("/navigate", params={"path": "/record"}).json()
        self.assertIsNone(nav["redirect"])


class TestClientSessions(ApiTestCase):
    def test_new_client_is_signed_out(self):
        self.register()
        stranger = TestClient(self.app)
        self.assertEqual(stranger.get("/reminders/").status_code, 401)
        self.assertIsNone(stranger.get("/auth/me").json()["user"])
        nav = stranger.get("/navigate", params={"path": "/dashboard/patient"}).json()
        self.assertEqual(nav["redirect"], "/auth/login")

    def test_bearer_token(self):
        token = self.register()["session_token"]
        self.assertTrue(token)
        other = TestClient(self.app)
        resp = other.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(resp.json()["user"]["email"], "ann@example.com")

    def test_unknown_token(self):
        self.register()
        resp = self.client.get("/reminders/", headers={"Authorization": "Bearer nope"})
        self.assertEqual(resp.status_code, 401)

    def test_clients_keep_their_own_user(self):
        self.register()
        other = TestClient(self.app)
        self.register(CAREGIVER, client=other)
        other.post("/reminders/", json={"medicine": "Metformin"})

        self.assertEqual(self.client.get("/auth/me").json()["user"]["role"], "patient")
        self.assertEqual(other.get("/auth/me").json()["user"]["role"], "caregiver")
        self.assertEqual(self.client.get("/reminders/").json()["items"], [])
        self.assertEqual(len(other.get("/reminders/").json()["items"]), 1)

    def test_logout_ends_only_own_session(self):
        token = self.register()["session_token"]
        other = TestClient(self.app)
        self.register(CAREGIVER, client=other)

        self.client.post("/auth/logout")
        resp = other.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        self.assertIsNone(resp.json()["user"])
        self.assertEqual(other.get("/auth/me").json()["user"]["name"], "Cy")

    def test_login_replaces_previous_token(self):
        self.register(PATIENT, client=TestClient(self.app))
        first = self.login(PATIENT)["session_token"]
        second = self.login(PATIENT)["session_token"]
        self.assertNotEqual(first, second)

        other = TestClient(self.app)
        resp = other.get("/auth/me", headers={"Authorization": f"Bearer {first}"})
        self.assertIsNone(resp.json()["user"])
        resp = other.get("/auth/me", headers={"Authorization": f"Bearer {second}"})
        self.assertEqual(resp.json()["user"]["email"], "ann@example.com")

    def test_login_as_other_user_drops_previous_capture(self):
        ann = self.register(PATIENT, client=TestClient(self.app))["user"]["id"]
        cy = self.register(CAREGIVER, client=TestClient(self.app))["user"]["id"]
        captures = self.app.state.captures

        self.login(PATIENT)
        self.client.post("/record/toggle", json={"speech_supported": True})
        self.assertEqual(captures.active_uids(), [ann])

        self.login(CAREGIVER)
        self.assertEqual(captures.active_uids(), [])
        status = self.client.get("/record/").json()
        self.assertEqual(status["recording"], "idle")
        self.assertEqual(captures.active_uids(), [cy])

    def test_failed_login_keeps_session(self):
        self.register()
        resp = self.client.post("/auth/login", json={"email": "ann@example.com", "password": "wrong"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(self.client.get("/auth/me").json()["user"]["name"], "Ann")


class TestDashboardRoutes(ApiTestCase):
    def test_role_gating(self):
        self.register()
        self.assertEqual(self.client.get("/dashboard/patient").status_code, 200)
        self.assertEqual(self.client.get("/dashboard/caregiver").status_code, 403)

    def test_signed_out(self):
        self.assertEqual(self.client.get("/dashboard/patient").status_code, 401)

    def test_shell(self):
        self.register(CAREGIVER)
        shell = self.client.get("/shell", params={"path": "/settings"}).json()
        self.assertEqual(shell["header"]["user_name"], "Cy")
        self.assertEqual([i["href"] for i in shell["sidebar"] if i["active"]], ["/settings"])

    def test_caregiver_counts(self):
        self.register(CAREGIVER)
        self.client.post("/flashcards/", json={"title": "t", "content": "c"})
        content = self.client.get("/dashboard/caregiver").json()["content"]
        self.assertEqual(content["flashcard_count"], 1)
        self.assertEqual(content["reminder_count"], 0)


class TestRecordRoutes(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.user = self.register()["user"]

    def test_reminder_defaults(self):
        resp = self.client.post("/reminders/", json={})
        self.assertEqual(resp.status_code, 201, resp.text)
        items = self.client.get("/reminders/").json()["items"]
        self.assertEqual(items[0]["medicine"], "")
        self.assertEqual(items[0]["days"], [])

    def test_stop_ignores_support_flag(self):
        self.client.post("/record/toggle", json={"speech_supported": True})
        status = self.client.post("/record/toggle", json={"speech_supported": False}).json()
        self.assertEqual(status["recording"], "idle")
        self.assertEqual(status["notice"]["title"], "Recording stopped")

        recognizer = self.app.state.captures.get(self.user["id"]).recognizer
        self.assertEqual(recognizer.listener_count, 0)
        self.assertFalse(recognizer.running)

        # The next start reports support again
        status = self.client.post("/record/toggle", json={"speech_supported": False}).json()
        self.assertEqual(status["notice"]["title"], "Not supported")

    def test_reminder_crud(self):
        body = {
            "medicine": "Lisinopril",
            "dosage": "10mg",
            "frequency": "daily",
            "time": "08:00",
            "days": ["Mon", "Wed", "Fri"],
        }
        created = self.client.post("/reminders/", json=body)
        self.assertEqual(created.status_code, 201)

        items = self.client.get("/reminders/").json()["items"]
        self.assertEqual(len(items), 1)
        for key, value in body.items():
            self.assertEqual(items[0][key], value)

        rid = items[0]["id"]
        self.assertEqual(self.client.delete(f"/reminders/{rid}").status_code, 200)
        self.assertEqual(self.client.delete(f"/reminders/{rid}").status_code, 404)
        self.assertEqual(self.client.get("/reminders/").json()["items"], [])

    def test_flashcards(self):
        resp = self.client.post("/flashcards/", json={"content": "Take with food"})
        self.assertEqual(resp.json()["item"]["title"], "Untitled")
        items = self.client.get("/flashcards/").json()["items"]
        self.assertEqual([c["content"] for c in items], ["Take with food"])

    def test_suggest(self):
        data = self.client.post("/flashcards/suggest", json={"content": "BP 130/85"}).json()
        self.assertEqual(len(data["items"]), 3)
        empty = self.client.post("/flashcards/suggest", json={"content": ""}).json()
        self.assertEqual(empty["notice"]["variant"], "destructive")

    def test_capture_flow(self):
        status = self.client.post("/record/toggle", json={"speech_supported": True}).json()
        self.assertEqual(status["recording"], "recording")

        batch = {"result_index": 0, "results": [{"transcript": "blood pressure is fine", "is_final": True}]}
        status = self.client.post("/record/results", json=batch).json()
        self.assertEqual(status["transcript"], "blood pressure is fine ")

        status = self.client.post("/record/toggle", json={"speech_supported": True}).json()
        self.assertEqual(status["recording"], "idle")

        status = self.client.post("/record/summary", json={"symptoms": "dizziness"}).json()
        self.assertEqual(status["summary_state"], "summarized")
        self.assertIn("dizziness", status["summary"])

        cards = self.client.get("/flashcards/").json()["items"]
        self.assertEqual(cards[0]["category"], "Summaries")

    def test_capture_unsupported(self):
        status = self.client.post("/record/toggle", json={"speech_supported": False}).json()
        self.assertEqual(status["recording"], "idle")
        self.assertEqual(status["notice"]["title"], "Not supported")

    def test_empty_summary(self):
        status = self.client.post("/record/summary").json()
        self.assertEqual(status["notice"]["title"], "No transcript")
        self.assertEqual(self.client.get("/flashcards/").json()["items"], [])


class TestChatRoute(ApiTestCase):
    def test_medication_reply(self):
        resp = self.client.post(
            "/api/chat",
            json={"messages": [{"role": "user", "content": "Tell me about my MEDICATION"}]},
        )
        self.assertEqual(resp.status_code, 200)
        parts = parse_stream(resp.text)
        self.assertEqual(parts["0"], REPLY_RULES[0][1])
        self.assertEqual(parts["d"]["finishReason"], "stop")

    def test_default_reply_without_session(self):
        resp = self.client.post("/api/chat", json={"messages": [{"role": "user", "content": "xyz"}]})
        self.assertEqual(parse_stream(resp.text)["0"], DEFAULT_REPLY)


if __name__ == '__main__':
    unittest.main()
