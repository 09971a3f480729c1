"""Shared test constants and helpers."""

TEST_SECRET = "test-session-secret-for-testing-only-0123456789"

START_TIME = 1_700_000_000
TEST_TTL_SECONDS = 900


class FakeClock:
    """Controllable replacement for time.time."""

    def __init__(self, now: float = START_TIME) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
