"""
Smoke-check a running server (uvicorn medilog.main:app) end to end.
Uses real Firebase, so point it at a test project.
"""
import sys
import uuid

import requests

BASE_URL = "http://127.0.0.1:8000"


def check(label, resp, expected=200):
    ok = resp.status_code == expected
    print(f"{'OK ' if ok else 'FAIL'} {label}: {resp.status_code}")
    if not ok:
        print(resp.text)
    return ok


def run():
    email = f"verify_{uuid.uuid4().hex[:8]}@example.com"
    s = requests.Session()

    r = s.post(f"{BASE_URL}/auth/register",
               json={"name": "Verify User", "email": email, "password": "verify123", "role": "patient"})
    if not check("register", r, 201):
        return False
    print(f"     redirect -> {r.json()['redirect']}")

    reminder = {"medicine": "Lisinopril", "dosage": "10mg", "frequency": "daily",
                "time": "08:00", "days": ["Mon", "Wed", "Fri"]}
    check("create reminder", s.post(f"{BASE_URL}/reminders/", json=reminder), 201)

    items = s.get(f"{BASE_URL}/reminders/").json().get("items", [])
    print(f"     reminders: {len(items)}")

    check("toggle on", s.post(f"{BASE_URL}/record/toggle", json={"speech_supported": True}))
    s.post(f"{BASE_URL}/record/results",
           json={"result_index": 0, "results": [{"transcript": "doctor said rest", "is_final": True}]})
    check("toggle off", s.post(f"{BASE_URL}/record/toggle", json={"speech_supported": True}))
    r = s.post(f"{BASE_URL}/record/summary", json={})
    check("summary", r)
    print(f"     notice: {r.json().get('notice')}")

    r = s.post(f"{BASE_URL}/api/chat", json={"messages": [{"role": "user", "content": "medication?"}]})
    check("chat", r)
    print(f"     {r.text.strip()}")

    check("logout", s.post(f"{BASE_URL}/auth/logout"))
    r = s.get(f"{BASE_URL}/navigate", params={"path": "/dashboard/patient"})
    print(f"     after logout -> {r.json().get('redirect')}")
    return True


if __name__ == "__main__":
    sys.exit(0 if run() else 1)
