"""
Core domain models, mathematical primitives, and invariants.

This module contains the foundational building blocks of the token ledger
that are independent of any execution environment (chains, harnesses, etc.).
"""
