"""Root test configuration: shared article builders and isolated settings"""

import pytest

from mdcorpus.config import Settings


SENTINEL = "<!-- @@mdcorpus:document-boundary@@ -->"


def article(title="Hello", date="2023-01-01", spoiler="A short teaser.", cta="swift", body="Body text.", **extra) -> str:
    """Return a well-formed article fragment; pass None to omit a field."""
    fields = {"title": title, "date": date, "spoiler": spoiler, "cta": cta, **extra}
    lines = ["---"]
    lines += [f"{k}: {v}" for k, v in fields.items() if v is not None]
    lines += ["---", "", body]
    return "\n".join(lines) + "\n"


@pytest.fixture(name="settings")
def settings_fixture():
    return Settings(sentinel=SENTINEL)


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch, tmp_path):
    """Keep config.yaml and MDCORPUS_* variables of the host out of tests."""
    monkeypatch.chdir(tmp_path)
    for name in Settings.model_fields:
        monkeypatch.delenv(f"MDCORPUS_{name.upper()}", raising=False)


@pytest.fixture(name="article")
def article_fixture():
    return article


@pytest.fixture(name="sentinel")
def sentinel_fixture():
    return SENTINEL
