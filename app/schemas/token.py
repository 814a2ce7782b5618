from pydantic import BaseModel

class TokenPayload(BaseModel):
    id: int
    role: str | None = None
    name: str | None = None
    email: str | None = None
    jti: str | None = None
    exp: int | None = None
