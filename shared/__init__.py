"""
Shared Kernel

Base classes and utilities shared across the rooms, bookings and users
contexts: domain events, value objects, the error taxonomy, the unit of
work and the in-process message bus.
"""
