"""
Application use cases.
"""

from siwe_auth.application.use_cases.verify_siwe_message import VerifySiweMessage

__all__ = ["VerifySiweMessage"]
