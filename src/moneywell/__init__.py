"""MoneyWell document reader: recurrence rules and their descriptions."""

__version__ = "0.1.0"
