import uvicorn
from app.core.config import settings

if __name__ == "__main__":
    # 환경변수에서 포트 가져오기 (기본값: 3000)
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=False,  # reload 비활성화
        log_level="info"
    )
