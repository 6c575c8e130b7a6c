from typing import Any, Callable, Iterator, Optional, TypeVar, Union
from fastapi import Request
from sqlalchemy import create_engine, select, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.sql.base import Executable
from shared.core import get_logger
from inventory_api.domain.models import Base, DiscountCoupon, SEED_COUPONS

logger = get_logger(__name__)

T = TypeVar("T")

class DataStoreGateway:
    """
    Owns the connection pool and the schema lifecycle.

    One instance is built at process start and shared by every request;
    handlers only ever hold a connection for a single request or transaction.
    """

    def __init__(self, database_url: str, pool_size: int = 10, max_overflow: int = 0, echo: bool = False):
        engine_kwargs: dict[str, Any] = {"echo": echo, "future": True, "pool_pre_ping": True}
        if database_url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        else:
            engine_kwargs["pool_size"] = pool_size
            engine_kwargs["max_overflow"] = max_overflow
        self.engine: Engine = create_engine(database_url, **engine_kwargs)
        self.SessionLocal = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)

    def test_connection(self) -> bool:
        """Check out one pooled connection and hand it straight back"""
        try:
            with self.engine.connect():
                pass
        except Exception as e:
            logger.error(f"Database connection failed: {e}")
            return False
        logger.info("Connected to database successfully")
        return True

    def initialize_schema(self) -> bool:
        """
        Create both tables and seed the default coupons.

        Safe to call on every startup: existing tables are kept and only
        coupon codes that are not stored yet get inserted. Failures are
        logged and reported through the return value so startup can proceed.
        """
        try:
            Base.metadata.create_all(self.engine)
            with self.engine.begin() as conn:
                existing = set(conn.execute(select(DiscountCoupon.coupon_code)).scalars())
                missing = [c for c in SEED_COUPONS if c["coupon_code"] not in existing]
                if missing:
                    conn.execute(DiscountCoupon.__table__.insert(), missing)
        except SQLAlchemyError:
            logger.exception("Database initialization failed")
            return False
        logger.info("Database schema initialized", extra={'extra_fields': {'seeded_coupons': len(missing)}})
        return True

    def execute(self, statement: Union[str, Executable], params: Optional[dict] = None) -> Union[list[dict], int]:
        """
        Run a single parameterized statement in its own autocommitted transaction.

        Returns the rows as dicts when the statement produces rows, otherwise
        the number of affected rows.
        """
        if isinstance(statement, str):
            statement = text(statement)
        with self.engine.begin() as conn:
            result = conn.execute(statement, params or {})
            if result.returns_rows:
                return [dict(row) for row in result.mappings()]
            return result.rowcount

    def session(self) -> Iterator[Session]:
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def with_transaction(self, fn: Callable[[Session], T]) -> T:
        """
        Run fn against a dedicated session inside one transaction.

        Commits when fn returns, rolls back when it raises. The connection
        goes back to the pool on every path, even when the rollback fails.
        """
        db = self.SessionLocal()
        try:
            db.begin()
            result = fn(db)
            db.commit()
            return result
        except Exception:
            try:
                db.rollback()
            except SQLAlchemyError:
                logger.exception("Transaction rollback failed")
            raise
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()

def get_gateway(request: Request) -> DataStoreGateway:
    return request.app.state.gateway

def get_db(request: Request) -> Iterator[Session]:
    yield from get_gateway(request).session()
