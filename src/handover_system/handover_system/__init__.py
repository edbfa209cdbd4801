"""Shift handover tracker package.

Organized by feature modules (shifts, stamps, rotation, handover, stats, state)
with a thin Flask controller layer over pure state transitions and services.
"""
