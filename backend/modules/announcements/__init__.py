"""
Happy-bar announcement module.
"""
