"""AccessHTML: HTML accessibility remediation."""

__version__ = "0.1.0"
