import pytest


@pytest.fixture(scope="function", autouse=True)
def terminal_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate tests from the color and width settings of the calling terminal."""
    for name in ("FORCE_COLOR", "NO_COLOR", "FORCE_WIDTH", "TERM"):
        monkeypatch.delenv(name, raising=False)
