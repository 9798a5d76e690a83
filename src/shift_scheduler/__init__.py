"""Shift Scheduler package.

Feature modules (users, shifts, timeoff, payroll, dashboard) each carry a
domain model, a repository protocol with its MySQL implementation, a service
holding the lifecycle rules, and a thin Flask controller.
"""
