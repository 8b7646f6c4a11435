from fastapi import APIRouter, Depends
from user_api.app.api.deps import get_document_store
from user_api.app.domain.ports import DocumentStorePort

router = APIRouter(prefix="/health", tags=["health"])

@router.get("")
def health(store: DocumentStorePort = Depends(get_document_store)):
    # 백엔드가 죽어 있어도 API 자체는 살아 있으므로 200
    return {"ok": True, "backend": store.ping()}
