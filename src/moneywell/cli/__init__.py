"""MoneyWell Command Line Interface.

Available commands:
- list: Print recurrence rules in canonical order
- describe: Describe a single recurrence rule
- report: Export recurrence rules to Excel
"""

from .main import main

__all__ = ["main"]
