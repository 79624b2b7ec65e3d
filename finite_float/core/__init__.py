"""
Core value types, numerical safeguards and JSON contracts.

This module contains the finite-float building blocks; it has no I/O and
no global state.
"""
