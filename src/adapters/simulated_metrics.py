"""Datos de respaldo del panel de métricas.

Se usan cuando un endpoint de `/v1/panel/*` falla, o para todo el panel
cuando el backend responde 401 (modo simulado).
"""

from __future__ import annotations

from core.domain.metrics import ActiveCompany, MonthlyProcesses, RecentProcess, StatusCount

PROCESS_STATUS: tuple[StatusCount, ...] = (
    StatusCount(status="En espera", count=45),
    StatusCount(status="En proceso", count=12),
    StatusCount(status="Suspendido", count=3),
    StatusCount(status="Abierto", count=8),
    StatusCount(status="Cerrado", count=25),
)

STUDENT_STATUS: tuple[StatusCount, ...] = (
    StatusCount(status="Disponible", count=320),
    StatusCount(status="En proceso", count=156),
    StatusCount(status="Inactivo", count=89),
    StatusCount(status="Contratado", count=234),
    StatusCount(status="No disponible", count=67),
)


def _month(
    month: int,
    name: str,
    total: int,
    waiting: int,
    open_: int,
    running: int,
    paused: int,
    closed: int,
) -> MonthlyProcesses:
    return MonthlyProcesses(
        month=month,
        month_name=name,
        total=total,
        by_status={
            "En espera": waiting,
            "Abierto": open_,
            "En proceso": running,
            "Suspendido": paused,
            "Cerrado": closed,
        },
    )


MONTHLY: tuple[MonthlyProcesses, ...] = (
    _month(1, "January", 12, 5, 3, 2, 1, 1),
    _month(2, "February", 18, 8, 4, 3, 1, 2),
    _month(3, "March", 25, 10, 6, 4, 2, 3),
    _month(4, "April", 22, 9, 5, 4, 1, 3),
    _month(5, "May", 28, 12, 7, 5, 1, 3),
    _month(6, "June", 15, 6, 3, 3, 1, 2),
    _month(7, "July", 32, 14, 8, 5, 2, 3),
    _month(8, "August", 19, 8, 4, 3, 1, 3),
)

RECENT_PROCESSES: tuple[RecentProcess, ...] = (
    RecentProcess(id="1", position="Senior Full Stack Developer", company_name="TechCorp Solutions", candidates_count=45, vacancies=3, status="Abierto"),
    RecentProcess(id="2", position="Cloud DevOps Engineer", company_name="CloudScale Inc", candidates_count=32, vacancies=2, status="En proceso"),
    RecentProcess(id="3", position="React Native Developer", company_name="Mobile Innovations", candidates_count=28, vacancies=4, status="En espera"),
    RecentProcess(id="4", position="Data Engineer", company_name="DataDrive Analytics", candidates_count=21, vacancies=2, status="Abierto"),
    RecentProcess(id="5", position="UX/UI Designer", company_name="Design Studio Pro", candidates_count=36, vacancies=1, status="En proceso"),
)

MOST_ACTIVE_COMPANIES: tuple[ActiveCompany, ...] = (
    ActiveCompany(id="1", name="TechCorp Solutions", sector="Technology", processes_count=24, active_processes_count=8),
    ActiveCompany(id="2", name="CloudScale Inc", sector="Cloud Services", processes_count=18, active_processes_count=6),
    ActiveCompany(id="3", name="DataDrive Analytics", sector="Data & Analytics", processes_count=15, active_processes_count=5),
    ActiveCompany(id="4", name="Mobile Innovations", sector="Mobile Development", processes_count=12, active_processes_count=4),
    ActiveCompany(id="5", name="FinTech Solutions", sector="Financial Technology", processes_count=10, active_processes_count=3),
)

# Valores del periodo anterior con los que se compara el resumen.
PREVIOUS_LIVE = {"total_processes": 108, "total_candidates": 1450, "placement_rate": 10, "active_processes": 8}
PREVIOUS_SIMULATED = {"total_processes": 85, "total_candidates": 780, "placement_rate": 25, "active_processes": 15}
