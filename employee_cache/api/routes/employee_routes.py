from fastapi import APIRouter, Depends, Request, status
from typing import List

from employee_cache.exceptions import RecordNotFound
from employee_cache.models.employee_model import CreateEmployeeInput, Employee
from employee_cache.services.employee_service import EmployeeService

router = APIRouter(prefix="/employee", tags=["Employees"])


def get_employee_service(request: Request) -> EmployeeService:
    return request.app.state.app_state.employees


# ===============================================
# 🔎 Lecturas (siempre desde la caché)
# ===============================================

@router.get("", response_model=List[Employee], response_model_exclude_none=True)
def get_all_employees(svc: EmployeeService = Depends(get_employee_service)):
    return list(svc.get_all())


@router.get("/search/{search_string}", response_model=List[Employee], response_model_exclude_none=True)
def search_employees(search_string: str, svc: EmployeeService = Depends(get_employee_service)):
    return svc.search_by_name(search_string)


@router.get("/highestSalary", response_model=int)
def get_highest_salary(svc: EmployeeService = Depends(get_employee_service)):
    return svc.get_highest_salary()


@router.get("/topTenHighestEarningEmployeeNames", response_model=List[str])
def get_top_ten_names(svc: EmployeeService = Depends(get_employee_service)):
    names = svc.get_top_earner_names(10)
    if not names:
        # mismo criterio que highestSalary: caché vacía => 404
        raise RecordNotFound("top-earners")
    return names


@router.get("/{employee_id}", response_model=Employee, response_model_exclude_none=True)
def get_employee(employee_id: str, svc: EmployeeService = Depends(get_employee_service)):
    return svc.get_by_id(employee_id)


# ===============================================
# ✍️ Escrituras (API externa + caché)
# ===============================================

@router.post("", response_model=Employee, response_model_exclude_none=True, status_code=status.HTTP_201_CREATED)
def create_employee(payload: CreateEmployeeInput, svc: EmployeeService = Depends(get_employee_service)):
    return svc.create(payload)


@router.delete("/{employee_id}", response_model=str)
def delete_employee(employee_id: str, svc: EmployeeService = Depends(get_employee_service)):
    return svc.delete_by_id(employee_id)


@router.post("/cache/refresh", status_code=status.HTTP_202_ACCEPTED)
def refresh_cache(request: Request):
    """Dispara un refresco completo en segundo plano."""
    request.app.state.app_state.refresher.trigger()
    return {"message": "Cache refresh started"}
