from typing import Any, Optional

from pydantic import BaseModel


class ServerResponse(BaseModel):
    data: Optional[Any] = None
    success: bool
    error: Optional[str] = ""
