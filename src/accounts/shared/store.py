from typing import Any

from sqlalchemy import Engine, delete, func, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, SQLModel, select

from accounts.core.query import QuerySpec, SearchFilter
from accounts.shared.http import server_error_handler
from accounts.shared.logger import Logger

logger = Logger(__name__).get_logger()


def _like_pattern(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class RecordStore[T: SQLModel]:
    """Document-store style access to one record table.

    Reads return detached records. Writes that touch an existing record are
    conditional on the ``version`` the caller read: if the record vanished
    or changed in between, nothing is written and the call reports failure.
    """

    def __init__(self, engine: Engine, model: type[T]):
        self.engine = engine
        self.model = model

    def get(self, record_id: str) -> T | None:
        with server_error_handler(), Session(self.engine) as session:
            return session.get(self.model, record_id)

    def get_by_email(self, email: str) -> T | None:
        with server_error_handler(), Session(self.engine) as session:
            return session.exec(
                select(self.model).where(self.model.email == email)
            ).first()

    def email_taken(self, email: str, exclude_id: str | None = None) -> bool:
        statement = select(self.model.id).where(self.model.email == email)
        if exclude_id is not None:
            statement = statement.where(self.model.id != exclude_id)

        with server_error_handler(), Session(self.engine) as session:
            return session.exec(statement).first() is not None

    def create(self, **fields: Any) -> T | None:
        record = self.model(**fields)
        with server_error_handler(), Session(self.engine) as session:
            session.add(record)
            try:
                session.commit()
            except IntegrityError as e:
                session.rollback()
                logger.warning("Rejected new %s: %s", self.model.__name__, e.orig)
                return None
            session.refresh(record)

        logger.info("Created %s %s", self.model.__name__, record.id)
        return record

    def update_fields(self, record_id: str, version: int, **fields: Any) -> bool:
        statement = (
            update(self.model)
            .where(self.model.id == record_id, self.model.version == version)
            .values(**fields, version=version + 1)
        )
        with server_error_handler(), Session(self.engine) as session:
            try:
                updated = session.connection().execute(statement).rowcount
                session.commit()
            except IntegrityError as e:
                session.rollback()
                logger.warning(
                    "Rejected update of %s %s: %s", self.model.__name__, record_id, e.orig
                )
                return False

        if updated != 1:
            logger.warning(
                "%s %s vanished or changed before update", self.model.__name__, record_id
            )
            return False

        logger.info("Updated %s %s", self.model.__name__, record_id)
        return True

    def delete(self, record_id: str, version: int) -> bool:
        statement = delete(self.model).where(
            self.model.id == record_id, self.model.version == version
        )
        with server_error_handler(), Session(self.engine) as session:
            deleted = session.connection().execute(statement).rowcount
            session.commit()

        if deleted != 1:
            logger.warning(
                "%s %s vanished or changed before delete", self.model.__name__, record_id
            )
            return False

        logger.info("Deleted %s %s", self.model.__name__, record_id)
        return True

    def count(self, search: SearchFilter | None = None) -> int:
        statement = select(func.count()).select_from(self.model)
        if search is not None:
            statement = statement.where(self.__match(search))

        with server_error_handler(), Session(self.engine) as session:
            return session.exec(statement).one()

    def find(
        self,
        query: QuerySpec | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[T]:
        statement = select(self.model)
        if query is not None:
            if query.filter is not None:
                statement = statement.where(self.__match(query.filter))
            column = getattr(self.model, query.sort_key)
            statement = statement.order_by(
                column.desc() if query.descending else column.asc(), self.model.id
            )
        statement = statement.offset(skip)
        if limit is not None:
            statement = statement.limit(limit)

        with server_error_handler(), Session(self.engine) as session:
            return list(session.exec(statement).all())

    def __match(self, search: SearchFilter):
        column = getattr(self.model, search.column)
        return column.ilike(_like_pattern(search.value), escape="\\")
