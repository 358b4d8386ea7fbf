from pydantic import BaseModel


class Token(BaseModel):
    access_token: str
    token_type: str


class UserLogin(BaseModel):
    ivd_id: str
    password: str
