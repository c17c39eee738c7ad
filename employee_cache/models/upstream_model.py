# Modelos del formato "wire" de la API externa de empleados
from typing import Generic, Optional, TypeVar
from pydantic import BaseModel, ConfigDict

from employee_cache.models.employee_model import Employee

T = TypeVar("T")


class UpstreamEmployee(BaseModel):
    id: str
    employee_name: str
    employee_salary: int
    employee_age: Optional[int] = None
    employee_title: Optional[str] = None
    employee_email: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    def to_employee(self) -> Employee:
        return Employee(
            id=self.id,
            name=self.employee_name,
            salary=self.employee_salary,
            age=self.employee_age,
            title=self.employee_title,
            email=self.employee_email,
        )


# Sobre común de todas las respuestas: {"data": ..., "status": "..."}
class UpstreamResponse(BaseModel, Generic[T]):
    data: Optional[T] = None
    status: Optional[str] = None
