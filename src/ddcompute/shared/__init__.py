"""
ddcompute - Shared Utilities

This package contains endpoint constants, paging and common data contracts.
"""
