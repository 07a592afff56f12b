"""Value-level validation helpers used alongside response assertions."""
import math
import re
from typing import Any, Mapping

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
PHONE_PATTERN = re.compile(r'^\+[1-9]\d{1,14}$')
MIN_PASSWORD_LENGTH = 8


class ValidationHelpers:
    """Boolean checks for emails, phone numbers, amounts and wallet payloads."""

    @staticmethod
    def validate_email(email: Any) -> bool:
        return isinstance(email, str) and bool(EMAIL_PATTERN.match(email))

    @staticmethod
    def validate_phone_number(phone: Any) -> bool:
        """E.164 format: '+' followed by up to 15 digits, no leading zero."""
        return isinstance(phone, str) and bool(PHONE_PATTERN.match(phone))

    @staticmethod
    def validate_password(password: Any) -> bool:
        return isinstance(password, str) and len(password) >= MIN_PASSWORD_LENGTH

    @staticmethod
    def validate_amount(amount: Any) -> bool:
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            return False
        return math.isfinite(amount) and amount > 0

    @staticmethod
    def validate_wallet_data(wallet_data: Mapping[str, Any]) -> bool:
        asset = wallet_data.get('asset')
        name = wallet_data.get('name')
        return isinstance(asset, str) and bool(asset) and isinstance(name, str) and bool(name)
