from pydantic import AliasChoices, Field

from .serde_base import SerdeBase


class CreatePiggyRequest(SerdeBase):
    name: str
    email: str
    password: str
    password_confirm: str
    balance: float = 0
    ktp: str


class UpdatePiggyRequest(SerdeBase):
    name: str
    email: str
    # Older clients send the replacement national ID as `ktp_baru`
    ktp: str = Field(validation_alias=AliasChoices("ktp", "ktp_baru"))
    balance: float | None = None


class KtpLookupRequest(SerdeBase):
    email: str


class KtpResponse(SerdeBase):
    name: str
    ktp: str


class PiggyResponse(SerdeBase):
    id: str
    name: str
    email: str
    balance: float
    ktp: str
