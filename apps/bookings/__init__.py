"""Bookings app package.

Booking requests for one room time slot on one date, their approval or
rejection, and the derived per-date availability of slots. Double
booking is prevented with row locks inside database transactions, backed
by partial unique constraints on the active statuses.
"""
