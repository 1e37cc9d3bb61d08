from contextlib import asynccontextmanager
from typing import Optional
import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.core.config import Settings, settings as default_settings
from app.core.exceptions import ApplicationError, GatewayError, StorageError, ValidationError
from app.database.database import Database
from app.routers import applications
from app.services.payment_gateway_service import RazorpayGateway
from app.services.resume_storage_service import ResumeStorageService

# 로거 설정 (간단히)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("careerpay.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    config: Settings = app.state.settings

    # DB는 프로세스 시작 시 한 번 열고 종료 시 닫음
    app.state.db = Database(config.database_url).open()
    # 주입받은 게이트웨이가 없을 때만 생성하고, 종료 시 함께 정리
    owns_gateway = app.state.gateway is None
    if owns_gateway:
        app.state.gateway = RazorpayGateway(
            key_id=config.razorpay_key_id,
            key_secret=config.razorpay_key_secret,
            base_url=config.razorpay_api_base_url
        )

    # 서버 시작 시 등록된 라우터/엔드포인트를 로그에 찍어 디버깅에 도움을 줍니다.
    routes = []
    for route in app.routes:
        path = getattr(route, "path", None)
        if not path:
            continue
        methods = getattr(route, "methods", None)
        routes.append({"path": path, "methods": sorted(methods) if methods else []})
    logger.info(f"Registered routes: {routes}")

    try:
        yield
    finally:
        await app.state.gateway.aclose()
        if owns_gateway:
            # 닫힌 클라이언트를 재사용하지 않도록 다음 시작 시 새로 생성
            app.state.gateway = None
        app.state.db.close()


# ---------------------------------------------------------------------------
# 예외 핸들러: 모든 오류는 {"error": "..."} 형태로 반환
# ---------------------------------------------------------------------------

async def validation_error_handler(request: Request, exc: ValidationError):
    logger.warning(f"Validation error: {exc.message} - {request.method} {request.url.path}")
    return JSONResponse(status_code=400, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Invalid request body: {exc.errors()} - {request.method} {request.url.path}")
    return JSONResponse(status_code=400, content={"error": ValidationError.default_message})


async def gateway_error_handler(request: Request, exc: GatewayError):
    logger.error(
        f"Payment gateway error (status={exc.status_code}, detail={exc.detail}) - "
        f"{request.method} {request.url.path}"
    )
    return JSONResponse(status_code=500, content={"error": ApplicationError.default_message})


async def storage_error_handler(request: Request, exc: StorageError):
    logger.error(f"Storage error: {exc.message} - {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": exc.message})


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled exception in request: {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": ApplicationError.default_message})


def create_app(settings: Optional[Settings] = None, gateway: Optional[RazorpayGateway] = None) -> FastAPI:
    config = settings or default_settings

    app = FastAPI(
        title="CareerPay API",
        description="지원서 접수 및 지원 수수료 결제 백엔드 API",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = config
    app.state.gateway = gateway
    app.state.resume_storage = ResumeStorageService(
        upload_dir=config.upload_dir,
        max_size=config.max_resume_size,
        allowed_extensions=config.allowed_resume_extensions
    )

    logger.info(f"Configured CORS origins: {config.cors_origins}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(GatewayError, gateway_error_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # 라우터 등록
    app.include_router(applications.router, tags=["지원"])

    @app.get("/health")
    def health_check(request: Request):
        return {"status": "healthy", "database": request.app.state.db.check_connection()}

    # 정적 파일 서빙 (업로드된 이력서)
    os.makedirs(config.upload_dir, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=config.upload_dir), name="uploads")

    # 공개 지원 폼 페이지가 있으면 루트에 마운트
    if os.path.isdir(config.public_dir):
        app.mount("/", StaticFiles(directory=config.public_dir, html=True), name="public")
    else:
        @app.get("/")
        async def root():
            return {"message": "CareerPay API 서버가 실행 중입니다!"}

    return app


app = create_app()
