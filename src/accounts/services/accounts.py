from abc import ABC, abstractmethod

from accounts.core import PasswordHasher, build_query, paginate
from accounts.models.requests import PageResponse, PiggyResponse, UserResponse
from accounts.models.schema import PiggyAccount, User
from accounts.shared.http import ErrorType, error_responder
from accounts.shared.logger import Logger
from accounts.shared.store import RecordStore

logger = Logger(__name__).get_logger()


class AccountService[T: (User, PiggyAccount)](ABC):
    """Validation rules around one account collection.

    Business rule failures are raised as ``ApiError`` and rendered by the
    application's error handler.
    """

    label = "user"
    searchable: tuple[str, ...] = ("name", "email")
    sortable: tuple[str, ...] = ("name", "email")

    def __init__(self, store: RecordStore[T], hasher: PasswordHasher):
        self.store = store
        self.hasher = hasher

    @abstractmethod
    def public(self, record: T):
        """Response model for a record, without the password hash."""

    def list_all(self) -> list:
        return [self.public(record) for record in self.store.find()]

    def list_page(
        self,
        page_number: int,
        page_size: int,
        sort: str | None = None,
        search: str | None = None,
    ) -> PageResponse:
        query = build_query(search, sort, self.searchable, self.sortable)
        count = self.store.count(query.filter)
        page = paginate(count, page_number, page_size)
        # Past the last record; huge offsets also overflow the store's integers
        if page.skip >= count:
            records = []
        else:
            records = self.store.find(
                query, skip=page.skip, limit=min(page.page_size, count - page.skip)
            )

        return PageResponse(
            page_number=page.page_number,
            page_size=page.page_size,
            count=count,
            total_pages=page.total_pages,
            has_previous_page=page.has_previous_page,
            has_next_page=page.has_next_page,
            data=[self.public(record) for record in records],
        )

    def get(self, record_id: str):
        record = self.store.get(record_id)
        if record is None:
            raise error_responder(ErrorType.UNPROCESSABLE_ENTITY, f"Unknown {self.label}")
        return self.public(record)

    def email_is_registered(self, email: str, exclude_id: str | None = None) -> bool:
        return self.store.email_taken(email, exclude_id=exclude_id)

    def create(self, name: str, email: str, password: str, password_confirm: str, **extra):
        if password != password_confirm:
            raise error_responder(
                ErrorType.INVALID_PASSWORD, "Password confirmation mismatched"
            )

        if self.email_is_registered(email):
            raise error_responder(
                ErrorType.EMAIL_ALREADY_TAKEN, "Email is already registered"
            )

        record = self.store.create(
            name=name, email=email, password=self.hasher.hash(password), **extra
        )
        if record is None:
            raise error_responder(
                ErrorType.UNPROCESSABLE_ENTITY, f"Failed to create {self.label}"
            )
        return record

    def update(self, record_id: str, name: str, email: str, **extra):
        # The record's own email does not count as taken
        if self.email_is_registered(email, exclude_id=record_id):
            raise error_responder(
                ErrorType.EMAIL_ALREADY_TAKEN, "Email is already registered"
            )

        record = self.store.get(record_id)
        if record is None or not self.store.update_fields(
            record_id, record.version, name=name, email=email, **extra
        ):
            raise error_responder(
                ErrorType.UNPROCESSABLE_ENTITY, f"Failed to update {self.label}"
            )

    def delete(self, record_id: str):
        record = self.store.get(record_id)
        if record is None or not self.store.delete(record_id, record.version):
            raise error_responder(
                ErrorType.UNPROCESSABLE_ENTITY, f"Failed to delete {self.label}"
            )

    def check_password(self, record_id: str, password: str) -> bool:
        record = self.store.get(record_id)
        if record is None:
            self.hasher.verify(password, self.hasher.filler_hash)
            return False
        return self.hasher.verify(password, record.password)

    def change_password(
        self, record_id: str, password_old: str, password_new: str, password_confirm: str
    ):
        if password_new != password_confirm:
            raise error_responder(
                ErrorType.INVALID_PASSWORD, "Password confirmation mismatched"
            )

        if not self.check_password(record_id, password_old):
            raise error_responder(ErrorType.INVALID_CREDENTIALS, "Wrong password")

        record = self.store.get(record_id)
        if record is None or not self.store.update_fields(
            record_id, record.version, password=self.hasher.hash(password_new)
        ):
            raise error_responder(
                ErrorType.UNPROCESSABLE_ENTITY, "Failed to change password"
            )
        logger.info("Password changed for %s %s", self.label, record_id)


class UserService(AccountService[User]):
    def public(self, record: User) -> UserResponse:
        return UserResponse(id=record.id, name=record.name, email=record.email)


class PiggyService(AccountService[PiggyAccount]):
    label = "piggybank account"
    searchable = ("name", "email", "ktp")
    sortable = ("name", "email", "balance", "ktp")

    def public(self, record: PiggyAccount) -> PiggyResponse:
        return PiggyResponse(
            id=record.id,
            name=record.name,
            email=record.email,
            balance=record.balance,
            ktp=record.ktp,
        )

    def update(
        self,
        record_id: str,
        name: str,
        email: str,
        ktp: str,
        balance: float | None = None,
    ):
        extra = {"ktp": ktp}
        if balance is not None:
            extra["balance"] = balance
        super().update(record_id, name, email, **extra)

    def get_ktp_by_email(self, email: str) -> dict:
        record = self.store.get_by_email(email)
        if record is None:
            raise error_responder(ErrorType.NOT_FOUND, "User not found with this email")
        return {"name": record.name, "ktp": record.ktp}
