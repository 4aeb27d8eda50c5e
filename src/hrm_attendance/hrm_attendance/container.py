from __future__ import annotations

from dataclasses import dataclass

from .attendance.factory import AttendanceStrategyFactory
from .attendance.service import AttendanceViewService
from .attendance.sheets_attendance_repository import SheetsAttendanceRepository
from .gateway.connection import ApiConfig, SheetsApiClient
from .members.service import MemberService
from .members.sheets_member_repository import SheetsMemberRepository
from .settings.service import PolicyService
from .settings.sheets_settings_repository import SheetsSettingsRepository
from .timesheet.calculator.overnight_calculator import OvernightWrapCalculator
from .timesheet.service import TimesheetReportService


@dataclass(frozen=True)
class Container:
    client: SheetsApiClient

    members_repo: SheetsMemberRepository
    settings_repo: SheetsSettingsRepository
    attendance_repo: SheetsAttendanceRepository

    member_service: MemberService
    policy_service: PolicyService
    timesheet_report_service: TimesheetReportService

    def new_attendance_view(self) -> AttendanceViewService:
        """A fresh view session; views hold per-date state and are not shared."""

        return AttendanceViewService(
            self.attendance_repo,
            self.member_service,
            self.policy_service,
            strategy_factory=AttendanceStrategyFactory(),
            calculator=OvernightWrapCalculator(),
        )


def build_container(*, api_config: dict) -> Container:
    config = ApiConfig(
        url=str(api_config["url"]),
        timeout=float(api_config.get("timeout", 30)),
    )
    client = SheetsApiClient.get_instance(config)

    members_repo = SheetsMemberRepository(client)
    settings_repo = SheetsSettingsRepository(client)
    attendance_repo = SheetsAttendanceRepository(client)

    member_service = MemberService(members_repo)
    policy_service = PolicyService(settings_repo)
    timesheet_report_service = TimesheetReportService(attendance_repo, member_service, policy_service)

    return Container(
        client=client,
        members_repo=members_repo,
        settings_repo=settings_repo,
        attendance_repo=attendance_repo,
        member_service=member_service,
        policy_service=policy_service,
        timesheet_report_service=timesheet_report_service,
    )
