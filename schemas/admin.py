from pydantic import BaseModel, Field


class LoginSchema(BaseModel):
    username: str = Field(..., description="관리자 아이디")
    password: str = Field(..., description="비밀번호")
