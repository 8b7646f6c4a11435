import textwrap
from ipaddress import IPv4Address
import pytest
from pydantic import ValidationError

from user_api.app.platform.config import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """로컬 .env / 환경변수 영향 제거"""
    for key in ("APP_NAME", "DEBUG", "SERVER_HOST", "SERVER_PORT", "DB_HOST", "DB_PORT", "USERS_INDEX",
                "MAX_BODY_BYTES"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


def test_default_settings():
    """기본값이 올바르게 설정되는지 검증"""
    s = Settings()
    assert s.APP_NAME == "user-api"
    assert s.DEBUG is False
    assert s.SERVER_HOST == IPv4Address("127.0.0.1")
    assert s.SERVER_PORT == 8080
    assert s.USERS_INDEX == "users"
    assert s.opensearch_address == "http://localhost:9200"


def test_override_with_env(monkeypatch):
    """환경변수로 설정값이 덮어써지는지 검증"""
    monkeypatch.setenv("DEBUG", "true")
    monkeypatch.setenv("SERVER_HOST", "0.0.0.0")
    monkeypatch.setenv("DB_HOST", "search")
    monkeypatch.setenv("DB_PORT", "9999")

    s = Settings()
    assert s.DEBUG is True
    assert s.SERVER_HOST == IPv4Address("0.0.0.0")
    assert s.opensearch_address == "http://search:9999"


def test_db_port_is_independent_of_db_host(monkeypatch):
    """DB_HOST 만 바꿔도 포트는 DB_PORT(기본 9200)에서 읽는다"""
    monkeypatch.setenv("DB_HOST", "opensearch.internal")

    s = Settings()
    assert s.DB_HOST == "opensearch.internal"
    assert s.DB_PORT == 9200


def test_env_file_loading(tmp_path):
    """env 파일에서 로딩되는지 검증"""
    env_file = tmp_path / "custom.env"
    env_file.write_text(textwrap.dedent("""
        APP_NAME=env-app
        DB_HOST=env-host
        DB_PORT=1234
    """))

    s = Settings(_env_file=env_file)
    assert s.APP_NAME == "env-app"
    assert s.opensearch_address == "http://env-host:1234"


@pytest.mark.parametrize("key, value", [
    ("SERVER_HOST", "not-an-ip"),
    ("SERVER_HOST", "::1"),
    ("SERVER_PORT", "70000"),
    ("DB_PORT", "abc"),
])
def test_invalid_values_fail_fast(monkeypatch, key, value):
    monkeypatch.setenv(key, value)
    with pytest.raises(ValidationError):
        Settings()


def test_db_port_zero_rejected(monkeypatch):
    """DB_PORT=0 은 build_client 가 거절하므로 설정 단계에서 먼저 막는다"""
    monkeypatch.setenv("DB_PORT", "0")
    with pytest.raises(ValidationError):
        Settings()


def test_max_body_bytes_default():
    assert Settings().MAX_BODY_BYTES == 16 * 1024
