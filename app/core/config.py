from pydantic_settings import BaseSettings, NoDecode
from typing import Annotated, Optional, List
from pydantic import Field, field_validator
from decimal import Decimal
import json

class Settings(BaseSettings):

    # 서버 설정
    port: int = Field(default=3000, alias="PORT")

    # 데이터베이스 설정
    database_url: str = Field(default="sqlite:///./applications.db", alias="DATABASE_URL")

    # Razorpay 결제 설정
    razorpay_key_id: Optional[str] = Field(default=None, alias="RAZORPAY_KEY_ID")
    razorpay_key_secret: Optional[str] = Field(default=None, alias="RAZORPAY_KEY_SECRET")
    razorpay_api_base_url: str = Field(default="https://api.razorpay.com/v1", alias="RAZORPAY_API_BASE_URL")

    # 지원 수수료 (루피 단위, 결제 요청 시 paise로 변환)
    submission_fee_rupees: Decimal = Field(default=Decimal("0"), alias="SUBMISSION_FEE_RUPEES")
    currency: str = Field(default="INR", alias="PAYMENT_CURRENCY")

    # 파일 업로드 설정
    upload_dir: str = Field(default="uploads", alias="UPLOAD_DIR")
    public_dir: str = Field(default="public", alias="PUBLIC_DIR")
    max_resume_size: int = Field(default=2 * 1024 * 1024, alias="MAX_RESUME_SIZE")  # 2MB
    allowed_resume_extensions: Annotated[List[str], NoDecode] = Field(default=[".pdf", ".doc", ".docx"], alias="ALLOWED_RESUME_EXTENSIONS")

    # CORS 설정
    cors_origins: Annotated[List[str], NoDecode] = Field(default=["*"], alias="CORS_ORIGINS")

    @field_validator("cors_origins", "allowed_resume_extensions", mode="before")
    @classmethod
    def _split_list(cls, value):
        """환경변수로 전달된 값이 문자열(JSON 또는 쉼표 구분)일 경우 리스트로 파싱"""
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return parsed
            except json.JSONDecodeError:
                pass
            return [v.strip() for v in value.split(",") if v.strip()]
        return value

    @field_validator("allowed_resume_extensions")
    @classmethod
    def _normalize_extensions(cls, value: List[str]) -> List[str]:
        # ".PDF", "pdf" 모두 ".pdf"로 맞춤
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in value]

    # pydantic v2 model configuration: load `.env` and ignore extra env vars
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

settings = Settings()
