"""Gym Tracker package.

Attendance persistence and aggregation organized by feature modules
(attendance, training_types, users, stats) with repository, service and thin
Flask controller layers.
"""
