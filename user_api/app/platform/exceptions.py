class DomainError(Exception):
    """도메인/유즈케이스 공통 베이스 예외"""
    pass

class ResourceNotFound(DomainError):
    def __init__(self, resource: str, detail: str | None = None):
        super().__init__(detail or f"{resource} not found")
        self.resource = resource

class InvalidInput(DomainError):
    def __init__(self, message: str):
        super().__init__(message)

class UserNotFound(ResourceNotFound):
    def __init__(self, user_id: str):
        super().__init__("user", f"user not found: {user_id}")
        self.user_id = user_id

class UserCreationFailed(DomainError):
    def __init__(self, user_id: str, result: str | None):
        super().__init__(f"user creation failed for {user_id}: result={result}")
        self.user_id = user_id
        self.result = result


# ===== 검색 백엔드(OpenSearch/Elasticsearch) 오류 =====
class SearchBackendError(DomainError):
    """검색 백엔드 호출 실패의 공통 베이스 예외"""
    pass

class BackendConnectionError(SearchBackendError):
    """전송 계층 실패(연결 거부, DNS, 타임아웃 등)"""
    pass

class DeserializationError(SearchBackendError):
    """응답이 JSON이 아니거나 기대한 envelope 형태와 다름"""
    pass

class DocumentNotFoundError(SearchBackendError):
    """예약됨: create/get/search 에서는 발생시키지 않는다."""
    pass

class InvalidAddressError(SearchBackendError):
    """백엔드 주소(host/port)가 유효하지 않음"""
    pass
