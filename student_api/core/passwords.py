import bcrypt


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time bcrypt check; malformed hashes never match."""
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except (ValueError, TypeError):
        return False
