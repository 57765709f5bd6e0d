from pydantic import BaseModel

class TokenPayload(BaseModel):
    sub: str
    email: str | None = None
    name: str | None = None
    picture: str | None = None
    exp: int | None = None
