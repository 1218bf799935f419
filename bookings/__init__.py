"""Booking creation service: Clerk OAuth token → Google Calendar event → booking row."""
