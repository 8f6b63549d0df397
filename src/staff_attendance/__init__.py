"""Staff Attendance package.

Organized by feature modules (users, attendance, reports, store) with a thin
Flask JSON adapter on top of plain service/repository layers.
"""
