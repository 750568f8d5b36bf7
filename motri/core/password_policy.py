from motri.core.errors import WeakPassword

DEFAULT_MIN_LENGTH = 6


def validate_password(password: str, min_length: int = DEFAULT_MIN_LENGTH) -> None:
    if len(password or "") < min_length:
        raise WeakPassword(f"Password must be at least {min_length} characters long")
