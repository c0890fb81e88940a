"""
FinTrack - Personal Finance Tracker

Records income/expense transactions, bill reminders, category budgets
and investment holdings, and derives the dashboard numbers from them.

DESIGN PRINCIPLES:
1. Derived values are computed, never stored
2. Mutations are copy-on-write and report their failures
3. Loading fails open; nothing the user did is lost to a bad file
4. Storage is swappable
"""

__version__ = "1.0.0"
