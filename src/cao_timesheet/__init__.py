"""CAO timesheet engine: driver hours, allowances and period reports."""

__version__ = "1.0.0"
