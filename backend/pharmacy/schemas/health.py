from pydantic import BaseModel
from pharmacy.schemas.common import UtcDatetime


class HealthResponse(BaseModel):
    status: str
    timestamp: UtcDatetime
