from pydantic import BaseModel, Field

from pdr_tracker.features.validation import Password, RawSecret

# ---------- Inputs ----------

class LoginIn(BaseModel):
    username: str = Field(min_length=1)
    password: RawSecret = Field(min_length=1)

class ChangePasswordIn(BaseModel):
    old_password: RawSecret = Field(min_length=1)
    new_password: Password = Field(min_length=1)


# ---------- Outputs ----------

class PrincipalOut(BaseModel):
    id: int
    username: str
    role: str
