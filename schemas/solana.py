from pydantic import BaseModel, Field
from typing import List


class BalanceError(BaseModel):
    public_key: str
    error: str


class BalanceReport(BaseModel):
    accounts: List[str] = Field(default_factory=list, description="'<public key>: <amount> SOL' for every non-zero balance, in request order")
    errors: List[BalanceError] = Field(default_factory=list, description="Keys that could not be parsed or queried, in request order")
