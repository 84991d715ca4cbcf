"""
Credential relay module
"""
from .relay import AskPassRelay, AskPassword

__all__ = ["AskPassRelay", "AskPassword"]
