from uuid import uuid4

from sqlmodel import Field, SQLModel


def new_id() -> str:
    return uuid4().hex


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str = Field(..., description="Display name")
    email: str = Field(..., unique=True, index=True, description="Unique email")
    password: str = Field(..., description="Hashed password")
    version: int = Field(default=1, description="Bumped on every write")


class PiggyAccount(SQLModel, table=True):
    __tablename__ = "piggybank"

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str = Field(..., description="Display name")
    email: str = Field(..., unique=True, index=True, description="Unique email")
    password: str = Field(..., description="Hashed password")
    balance: float = Field(default=0, description="Account balance")
    ktp: str = Field(default="", description="National identity card number")
    version: int = Field(default=1, description="Bumped on every write")
