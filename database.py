from sqlalchemy import create_engine, event
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from pydantic_settings import BaseSettings
from functools import lru_cache, wraps
import logging

from core.exceptions import ConstraintViolation

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    database_url: str = "sqlite:///./tournament.db"
    min_participant_age: int = 1
    min_event_age: int = 16
    seed_sample_data: bool = False
    log_level: str = "INFO"

    class Config:
        env_file = ".env"


@lru_cache()
def get_settings():
    return Settings()


settings = get_settings()


def create_db_engine(database_url: str, **kwargs):
    """
    建立 SQLAlchemy Engine

    SQLite 需要特殊設定：
    - connect_args={"check_same_thread": False}：允許 FastAPI 多執行緒共用連線
    - PRAGMA foreign_keys=ON：SQLite 預設不檢查外鍵，每條連線都要打開
    - 檔案型資料庫：每個 transaction 以 BEGIN IMMEDIATE 開始

    為什麼需要 BEGIN IMMEDIATE：
        SQLite 會忽略 SELECT ... FOR UPDATE，而 pysqlite 預設要到第一個寫入才開
        transaction。這樣「鎖定讀取 → 更新」之間沒有任何鎖，別的連線可以在中間
        commit。改由 SQLAlchemy 的 begin 事件送出 BEGIN IMMEDIATE 之後，讀取就在
        寫入鎖之內，同一時間只有一個 transaction 能進入，其他連線會等待
        （最多 timeout 秒，逾時拋出 OperationalError）。

    參數：
        database_url: 資料庫 URL
        **kwargs: 傳給 create_engine；connect_args 會與 SQLite 預設值合併
    """
    is_sqlite = database_url.startswith("sqlite")
    connect_args = kwargs.pop("connect_args", {})
    if is_sqlite:
        connect_args = {"check_same_thread": False, **connect_args}

    db_engine = create_engine(
        database_url,
        connect_args=connect_args,
        pool_pre_ping=True,
        **kwargs
    )

    if is_sqlite:
        # in-memory 資料庫只有一條連線，沒有跨連線競爭
        serialize_writers = database_url not in ("sqlite://", "sqlite:///:memory:")

        @event.listens_for(db_engine, "connect")
        def _configure_connection(dbapi_connection, connection_record):
            if serialize_writers:
                # 關掉 pysqlite 自己的 BEGIN，交給 _begin_immediate
                dbapi_connection.isolation_level = None
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        if serialize_writers:
            @event.listens_for(db_engine, "begin")
            def _begin_immediate(conn):
                conn.exec_driver_sql("BEGIN IMMEDIATE")

    return db_engine


engine = create_db_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """
    FastAPI dependency：提供 Database Session

    使用 yield 確保 session 在請求結束後會被關閉
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def transactional(func):
    """
    Transaction decorator：確保資料庫操作的原子性

    使用方式：
        @transactional
        def create_event(db: Session, ...):
            # 所有 DB 操作都在一個 transaction 內
            event = Event(...)
            db.add(event)
            # 不需要手動 commit，decorator 會處理

    如果函式內發生異常：
        - 自動 rollback
        - IntegrityError 轉成 ConstraintViolation
        - 其他異常會被重新拋出（讓上層處理）

    注意：
        - 第一個參數必須是 db: Session
        - 不要在函式內手動 commit（decorator 會處理）
        - 被呼叫的子步驟只能 flush，不能 commit，否則會破壞原子性
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        # 找出 db session（可能在 args 或 kwargs）
        db = None
        if args and isinstance(args[0], Session):
            db = args[0]
        elif 'db' in kwargs:
            db = kwargs['db']

        if db is None:
            raise ValueError(
                f"@transactional requires 'db: Session' as first argument, "
                f"but got args={args}, kwargs={kwargs}"
            )

        try:
            result = func(*args, **kwargs)
            db.commit()
            return result
        except IntegrityError as e:
            logger.error(f"Integrity error in {func.__name__}: {e.orig}", exc_info=True)
            db.rollback()
            raise ConstraintViolation(str(e.orig)) from e
        except Exception as e:
            logger.error(f"Transaction failed in {func.__name__}: {e}", exc_info=True)
            db.rollback()
            raise

    return wrapper
