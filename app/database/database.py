from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from fastapi import Request
import logging

logger = logging.getLogger(__name__)

# Base 클래스 생성 (모든 모델이 상속받을 클래스)
Base = declarative_base()


class Database:
    """
    프로세스 전체에서 공유하는 레코드 저장소 핸들

    앱 시작 시 open(), 종료 시 close()를 호출합니다 (main.py lifespan).
    동시 쓰기 직렬화는 DB(SQLite 파일 잠금)에 맡깁니다.
    """

    def __init__(self, url: str):
        self.url = url
        self.engine = None
        self.SessionLocal = None

    def open(self):
        connect_args = {}
        if make_url(self.url).get_backend_name() == "sqlite":
            # 요청은 threadpool에서 처리되므로 스레드 간 커넥션 공유 허용
            connect_args["check_same_thread"] = False

        self.engine = create_engine(
            self.url,
            connect_args=connect_args,
            pool_pre_ping=True,
            echo=False
        )

        # 테이블이 없으면 생성 (모델 import가 선행되어야 함)
        from app import models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)

        # 세션 팩토리 생성
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        logger.info(f"Database opened: {make_url(self.url).render_as_string(hide_password=True)}")
        return self

    def close(self):
        if self.engine is not None:
            self.engine.dispose()
            logger.info("Database closed")
        self.engine = None
        self.SessionLocal = None

    def session(self):
        if self.SessionLocal is None:
            raise RuntimeError("Database is not open")
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def check_connection(self):
        """데이터베이스 연결 상태를 확인합니다"""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return {"status": "connected", "message": "데이터베이스 연결 성공"}
        except Exception as e:
            return {"status": "error", "message": f"데이터베이스 연결 실패: {str(e)}"}


# 데이터베이스 세션 의존성
def get_db(request: Request):
    yield from request.app.state.db.session()
