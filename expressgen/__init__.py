"""expressgen -- feature-flag driven Express project scaffolder."""

__version__ = "0.1.0"
