import secrets
import string

from photodb.models.photo import UID_LENGTH


def generate_uid(length: int = UID_LENGTH) -> str:
    chars = string.ascii_letters + string.digits
    return ''.join(secrets.choice(chars) for _ in range(length))
