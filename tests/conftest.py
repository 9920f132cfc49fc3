import json
import os

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("JSONCONV_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def write_json(tmp_path):
    def _write(payload, name="data.json", raw=False):
        path = tmp_path / name
        text = payload if raw else json.dumps(payload)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
