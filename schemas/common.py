from pydantic import BaseModel
from typing import Any, Optional


class ApiResponse(BaseModel):
    status_code: int
    message: str
    data: Optional[Any] = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "status_code": 200,
                "message": "Ethereum Transaction found",
                "data": {"jsonrpc": "2.0", "id": 1, "result": {"hash": "0x..."}}
            }
        }
    }
