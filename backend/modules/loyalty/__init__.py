# backend/modules/loyalty/__init__.py

"""
MilkPoints ledger and reward-code module.
"""
