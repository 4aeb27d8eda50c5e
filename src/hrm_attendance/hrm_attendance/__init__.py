"""HRM Attendance package.

Feature modules (attendance, workcalendar, timesheet, members, settings, ...)
with a thin Flask controller layer over service/repository layers. The backing
store is a remote spreadsheet-style API reached through ``gateway``.
"""
