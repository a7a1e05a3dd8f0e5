import os
import shutil
import tempfile

import pytest

# 앱 import 전에 저장소 경로를 임시 디렉터리로
_TEST_ROOT = tempfile.mkdtemp(prefix="storefront-tests-")
os.environ["DATA_DIR"] = os.path.join(_TEST_ROOT, "data")
os.environ["UPLOAD_ROOT"] = os.path.join(_TEST_ROOT, "uploads")
os.environ["PUBLIC_DIR"] = os.path.join(_TEST_ROOT, "public")
os.environ.setdefault("LOG_LEVEL", "WARNING")


@pytest.fixture(autouse=True)
def clean_storage():
    """테스트마다 데이터/업로드 디렉터리를 비우고 기본 데이터로 다시 채움"""
    from db.init_data import init_storage
    from db.json_store import json_store

    for directory in (json_store.data_dir, json_store.upload_root):
        shutil.rmtree(directory, ignore_errors=True)
    init_storage(json_store)
    yield


def pytest_sessionfinish(session, exitstatus):
    shutil.rmtree(_TEST_ROOT, ignore_errors=True)
