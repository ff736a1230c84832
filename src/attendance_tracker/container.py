from __future__ import annotations

from dataclasses import dataclass

from .allotments.mysql_allotment_repository import MySQLAllotmentRepository
from .allotments.repository import AllotmentRepository
from .allotments.service import AllotmentService
from .attendance.factory import PunchStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .audit.sink import AuditEmitter, AuditSink
from .core.constants import DEFAULT_GRACE_PERIOD_MINUTES, DEFAULT_PUNCH_CAS_RETRIES
from .core.enums import OverlapPolicy, StatusPolicy
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .shifts.resolver import ShiftResolver
from .shifts.service import ShiftService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    shifts_repo: ShiftRepository
    allotments_repo: AllotmentRepository
    attendance_repo: AttendanceRepository

    shift_service: ShiftService
    allotment_service: AllotmentService
    shift_resolver: ShiftResolver
    attendance_service: AttendanceService


def wire_services(
    *,
    employees_repo: EmployeeRepository,
    shifts_repo: ShiftRepository,
    allotments_repo: AllotmentRepository,
    attendance_repo: AttendanceRepository,
    audit_sink: AuditSink | None = None,
    settings: object | None = None,
) -> Container:
    """Build the service graph on top of any repository implementations."""

    audit = AuditEmitter(audit_sink)
    grace = int(getattr(settings, "DEFAULT_GRACE_PERIOD_MINUTES", DEFAULT_GRACE_PERIOD_MINUTES))
    overlap_policy = OverlapPolicy(getattr(settings, "ALLOTMENT_OVERLAP_POLICY", OverlapPolicy.TRUNCATE_PRIOR.value))
    status_policy = StatusPolicy(getattr(settings, "ATTENDANCE_STATUS_POLICY", StatusPolicy.LATEST.value))
    cas_retries = int(getattr(settings, "PUNCH_CAS_RETRIES", DEFAULT_PUNCH_CAS_RETRIES))

    shift_resolver = ShiftResolver(allotments_repo, shifts_repo)
    shift_service = ShiftService(shifts_repo, audit=audit, default_grace_minutes=grace)
    allotment_service = AllotmentService(
        allotments_repo,
        shifts_repo,
        employees_repo,
        audit=audit,
        policy=overlap_policy,
    )
    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        shift_resolver,
        strategy_factory=PunchStrategyFactory(),
        audit=audit,
        status_policy=status_policy,
        cas_retries=cas_retries,
    )

    return Container(
        employees_repo=employees_repo,
        shifts_repo=shifts_repo,
        allotments_repo=allotments_repo,
        attendance_repo=attendance_repo,
        shift_service=shift_service,
        allotment_service=allotment_service,
        shift_resolver=shift_resolver,
        attendance_service=attendance_service,
    )


def build_container(*, db_config: dict, settings: object | None = None, audit_sink: AuditSink | None = None) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return wire_services(
        employees_repo=MySQLEmployeeRepository(conn),
        shifts_repo=MySQLShiftRepository(conn),
        allotments_repo=MySQLAllotmentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        audit_sink=audit_sink,
        settings=settings,
    )
