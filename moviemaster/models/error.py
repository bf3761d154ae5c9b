from pydantic import BaseModel
from typing import Optional

class APIError(BaseModel):
    message: str
    error: Optional[str] = None
