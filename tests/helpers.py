"""Test helpers shared across modules."""

from fastapi.testclient import TestClient

# Oldest first; the last key signs new sessions
TEST_SESSION_KEYS = ("test-key-old", "test-key-new")


class FakeClock:
    """Manually advanced clock for session expiry tests."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def register_and_login(client: TestClient, email: str, password: str) -> dict:
    res = client.post("/api/auth/register", json={"email": email, "password": password})
    assert res.status_code == 200, res.text
    res_login = client.post("/api/auth/login", json={"email": email, "password": password})
    assert res_login.status_code == 200, res_login.text
    return res.json()["user"]
