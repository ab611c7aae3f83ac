"""IRS Timesheet package.

This package is organized by feature modules (users, identity, timesheets,
reports, notifications) with a thin Flask controller layer over
service/repository layers.
"""
