"""
도메인 모델 정의.

- RelationshipStatus: 관계 상태(single/married)
- UserInput: 사용자 생성 요청 바디(id 없음)
- User: 저장/조회 단위. id는 생성 시점에 서버가 한 번만 부여한다.

Pydantic v2 기반 모델이라 검증/직렬화가 용이합니다.
"""

from __future__ import annotations

from enum import Enum
from typing import Any
from uuid import UUID, uuid4
from pydantic import BaseModel, ConfigDict, Field, StrictStr


JSONDict = dict[str, Any]

class RelationshipStatus(str, Enum):
    single = "single"
    married = "married"


class UserInput(BaseModel):
    """사용자 생성 요청. 클라이언트는 id를 보낼 수 없다."""
    name: StrictStr = Field(..., description="이름")
    age: int = Field(..., ge=0, le=255, strict=True, description="나이(0~255)")
    job: StrictStr | None = Field(None, description="직업")
    relationship_status: RelationshipStatus | None = Field(None, description="관계 상태")


class User(BaseModel):
    """
    users 인덱스 문서 1건과 1:1로 매핑되는 모델.
    frozen 모델이므로 생성 이후 id를 포함한 모든 필드가 불변.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(..., description="서버가 생성한 식별자(UUID v4)")
    name: StrictStr
    age: int = Field(..., ge=0, le=255, strict=True)
    job: StrictStr | None = None
    relationship_status: RelationshipStatus | None = None

    @classmethod
    def from_input(cls, data: UserInput) -> User:
        """생성 요청으로부터 새 id를 부여한 User를 만든다."""
        return cls(id=uuid4(), **data.model_dump())

    def to_document(self) -> JSONDict:
        """OpenSearch에 적재할 _source 형태."""
        return self.model_dump(mode="json")
