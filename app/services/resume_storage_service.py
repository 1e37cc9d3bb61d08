import os
import random
import time
from typing import Iterable
from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool
from app.core.exceptions import InvalidResumeTypeError, ResumeTooLargeError
import logging

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class ResumeStorageService:
    """이력서 파일 검증 후 업로드 디렉토리에 저장 (/uploads 로 정적 서빙)"""

    def __init__(self, upload_dir: str, max_size: int, allowed_extensions: Iterable[str]):
        self.upload_dir = upload_dir
        self.max_size = max_size
        self.allowed_extensions = {ext.lower() for ext in allowed_extensions}

    async def accept(self, file: UploadFile) -> str:
        """
        업로드된 이력서를 검증하고 저장합니다

        Args:
            file: 업로드 파일 (원본 파일명, 선언된 크기 포함)

        Returns:
            str: 저장된 고유 파일명

        Raises:
            InvalidResumeTypeError: 확장자가 .pdf/.doc/.docx 가 아닌 경우
            ResumeTooLargeError: 파일 크기가 제한(기본 2MB)을 넘는 경우
        """
        original_name = file.filename or ""
        extension = os.path.splitext(original_name)[1]
        if extension.lower() not in self.allowed_extensions:
            raise InvalidResumeTypeError()

        # 선언된 크기가 있으면 먼저 확인
        if file.size is not None and file.size > self.max_size:
            raise ResumeTooLargeError()

        # 제한을 넘는 순간 중단 (디스크에는 아무것도 쓰지 않음)
        content = bytearray()
        while True:
            chunk = await file.read(CHUNK_SIZE)
            if not chunk:
                break
            content.extend(chunk)
            if len(content) > self.max_size:
                raise ResumeTooLargeError()

        stored_name = self.generate_filename(original_name)
        await run_in_threadpool(self._write, stored_name, bytes(content))

        logger.info(f"Resume stored: {stored_name} ({len(content)} bytes, original={original_name})")
        return stored_name

    def generate_filename(self, original_name: str) -> str:
        # 현재 시각(ms) + 난수, 원본 확장자 유지
        extension = os.path.splitext(original_name)[1]
        unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
        return f"{unique_suffix}{extension}"

    def resolve(self, stored_name: str) -> str:
        return os.path.join(self.upload_dir, os.path.basename(stored_name))

    def _write(self, stored_name: str, content: bytes):
        os.makedirs(self.upload_dir, exist_ok=True)
        with open(self.resolve(stored_name), "wb") as f:
            f.write(content)
