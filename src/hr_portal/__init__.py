"""HR Portal package.

Organized by feature modules (leaves, holidays, attendance, employees, ...)
with a thin Flask controller layer over service/repository layers.
"""
