"""Class Attendance package.

Feature modules (classes, attendance, notifications, jobs, ...) sit behind a
thin Flask controller layer; attendance rules live in pure service code so the
dashboard and the scheduled jobs classify logs the same way.
"""
