# streamsphere/schemas/token.py
from pydantic import BaseModel

from streamsphere.schemas.user import UserRead

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"

class LoginResponse(Token):
    user: UserRead
