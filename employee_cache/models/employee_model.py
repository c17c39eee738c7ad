from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional


# Registro tal como vive en la caché (lo asigna y valida la API externa)
class Employee(BaseModel):
    id: str
    name: str
    salary: int
    age: Optional[int] = None
    title: Optional[str] = None
    email: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


# Payload de creación (validado en el borde HTTP)
class CreateEmployeeInput(BaseModel):
    name: str = Field(min_length=1)
    salary: int = Field(gt=0)
    age: int = Field(ge=16, le=75)
    title: str = Field(min_length=1)
    email: Optional[str] = None

    @field_validator("name", "title")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value
