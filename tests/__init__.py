"""
Test suite for the ERC20 token ledger

Contains:
- tests/unit/          : Unit tests for individual modules
"""
