"""
Account types.

Workers and businesses share one attribute set but live in separate
collections. The role is resolved once, at the request boundary, into a
variant of the ``Account`` union; everything downstream dispatches on the
variant instead of re-reading the raw role string.
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


class AccountRole(str, Enum):
    worker = "Worker"
    business = "Business"


class _AccountBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    id: Optional[str] = Field(None, alias="_id")
    name: Optional[str] = None
    email: str
    contact: Optional[str] = None
    location: Optional[str] = None
    profile_pic: Optional[str] = None


class WorkerAccount(_AccountBase):
    role: Literal["Worker"] = "Worker"


class BusinessAccount(_AccountBase):
    role: Literal["Business"] = "Business"


Account = Annotated[Union[WorkerAccount, BusinessAccount], Field(discriminator="role")]

_account_adapter = TypeAdapter(Account)


def parse_account(doc: dict) -> Union[WorkerAccount, BusinessAccount]:
    """Build the account variant for a stored document (password is dropped)."""
    return _account_adapter.validate_python(doc)


# Collection key (see db.mongodb.COLLECTIONS) per role
ACCOUNT_COLLECTION_KEYS = {
    AccountRole.worker: "users",
    AccountRole.business: "businesses",
}
