"""Training Attendance package.

Daily time-attendance recording for students of a training course, organized by
feature modules (attendance, courses, ...) with a thin Flask controller layer on
top of service/repository layers.
"""
