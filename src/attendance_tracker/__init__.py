"""Attendance Tracker package.

Feature modules (employees, shifts, allotments, attendance) carry a domain
model and a repository interface with a MySQL implementation; shifts,
allotments and attendance add a service layer and a thin Flask controller.
"""
