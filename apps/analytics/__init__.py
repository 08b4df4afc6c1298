"""Booking history counts scoped to the caller."""
