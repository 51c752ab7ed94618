from dataclasses import dataclass
from typing import Optional
from fastapi import Request



@dataclass
class WriteContext:
    feed_id: str
    credential: Optional[str]

class AuthBackend:
    async def authenticate(self, request: Request) -> WriteContext:
        raise NotImplementedError
