from ipaddress import IPv4Address

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = "user-api"
    DEBUG: bool = False

    # API 서버 listen 주소
    SERVER_HOST: IPv4Address = IPv4Address("127.0.0.1")
    SERVER_PORT: int = Field(8080, ge=0, le=65535)

    # 검색 백엔드(OpenSearch/Elasticsearch) 주소. host/port는 각각 별도 변수에서 읽는다.
    DB_HOST: str = "localhost"
    DB_PORT: int = Field(9200, ge=1, le=65535)
    DB_SCHEME: str = "http"
    USERS_INDEX: str = "users"

    # POST /users 요청 바디 최대 크기(byte)
    MAX_BODY_BYTES: int = Field(16 * 1024, ge=1)

    # 로깅
    LOG_LEVEL: str = "INFO"
    LOG_AS_JSON: bool = True
    LOG_TO_FILE: bool = False
    LOG_DIR: str = "/var/log/app"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @property
    def opensearch_address(self) -> str:
        return f"{self.DB_SCHEME}://{self.DB_HOST}:{self.DB_PORT}"

settings = Settings()
