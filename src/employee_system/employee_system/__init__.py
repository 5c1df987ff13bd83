"""Employee Management System package.

Feature modules (auth, users, attendance, leaves, tasks) each carry a thin
Flask controller layer on top of service and repository layers.
"""
