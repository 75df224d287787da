"""
Customer accounts, loyalty IDs and static PIN access.
"""
