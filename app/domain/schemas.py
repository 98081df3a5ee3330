# app/domain/schemas.py
from pydantic import BaseModel, ConfigDict, Field


class UserIn(BaseModel):
    """Schema dla tworzenia i aktualizacji użytkownika. Pole id jest ignorowane."""

    name: str = Field(..., description="Imię użytkownika")
    email: str = Field(..., description="Adres e-mail (bez walidacji formatu)")

    model_config = ConfigDict(extra="ignore")


class UserRead(BaseModel):
    """Schema dla użytkownika (response)."""

    id: int
    name: str | None
    email: str | None

    model_config = ConfigDict(from_attributes=True)
