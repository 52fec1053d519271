import json
import logging
from pathlib import Path

import pandas as pd
import pytest


@pytest.fixture
def logger():
    return logging.getLogger("i18n_sheets")


@pytest.fixture
def write_json():
    def _write(path: Path, data):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def read_json():
    def _read(path: Path):
        return json.loads(path.read_text(encoding="utf-8"))

    return _read


@pytest.fixture
def read_sheets():
    def _read(path: Path):
        return pd.read_excel(path, sheet_name=None, dtype=str, keep_default_na=False)

    return _read
