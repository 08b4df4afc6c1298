"""Rooms app package.

Rooms and their recurring daily time slots. A slot's stored status is a
permanent disable flag only; whether a slot can be booked on a given day
is derived from booking records by ``apps.bookings.availability``.
"""
