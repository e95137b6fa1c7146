"""gud command-line interface.

Metadata:
    Version: 0.1.0
    Author: gud Team
"""
from __future__ import annotations

__version__ = "0.1.0"
