from typing import Optional
from pydantic import BaseModel


class WaitlistIn(BaseModel):
    email: Optional[str] = None
    # Honeypot: hidden from people, filled in by bots
    nickname: Optional[str] = None
