"""Hostel management backend.

Organized by feature modules (attendance, blocks, rooms, students, ...) with a
thin Flask controller layer over service and repository layers.
"""
