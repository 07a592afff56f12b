"""
Request records for each endpoint group.

Optional fields are marked as such. Extra fields are allowed so templates can
carry backend fields this suite does not model. Business rules (positive
amounts, valid assets, date order) are deliberately not enforced here: the
backend under test owns them and negative-path tests must be able to send
values it rejects.
"""
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict


class RequestModel(BaseModel):
    """Base for request payloads sent through the endpoint facades."""
    model_config = ConfigDict(extra='allow')


class LoginRequest(RequestModel):
    email: str
    password: str
    grant_type: str = 'password'


class SignupRequest(RequestModel):
    email: str
    password: str
    name: str
    phone_number: str


class WalletCreate(RequestModel):
    asset: str
    name: str
    is_safe: Optional[bool] = None


class DepositRequest(RequestModel):
    amount: float
    asset: str


class TopupCreate(RequestModel):
    amount: float
    wallet_id: int


class ExchangeCreate(RequestModel):
    from_amount: float
    from_asset: str
    from_wallet_id: int
    to_asset: str
    to_wallet_id: int
    description: Optional[str] = None


class ExchangeQuoteParams(RequestModel):
    from_asset: str
    to_asset: str
    from_amount: float


class Allocation(RequestModel):
    metal_id: int
    percentage: float


class SavingsPlanCreate(RequestModel):
    savings_goal_type: str
    source_wallet_id: int
    target_value: float
    start_date: str
    end_date: str
    frequency: int
    description: Optional[str] = None
    allocations: List[Allocation] = []


class SavingsPlanTableParams(RequestModel):
    status: Optional[str] = None
    page: Optional[int] = None
    limit: Optional[int] = None


class ProfileUpdate(RequestModel):
    name: Optional[str] = None
    avatar: Optional[str] = None


Payload = Union[RequestModel, Mapping[str, Any]]


def to_payload(data: Optional[Payload]) -> Optional[Dict[str, Any]]:
    """Dump a record (dropping unset optionals) or copy a plain mapping."""
    if data is None:
        return None
    if isinstance(data, BaseModel):
        return data.model_dump(exclude_none=True)
    return dict(data)
