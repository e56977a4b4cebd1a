"""
Salary Tracker - Source Package

Tracks daily earnings for individuals and for companies with several
employees, and computes net salary after statutory deductions.

DESIGN PRINCIPLES:
1. Salary computation is pure and deterministic
2. Every owner's collection is scoped by its storage key
3. Bad input is rejected before anything is persisted
4. Corrupt or missing persisted data degrades to empty/default
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Salary Tracker Team"
