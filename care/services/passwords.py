from django.contrib.auth.hashers import check_password, make_password


def hash_password(secret: str) -> str:
    """Return a salted digest (``algorithm$iterations$salt$hash``) for *secret*."""
    return make_password(secret)


def verify_password(secret: str, digest: str) -> bool:
    # check_password returns False for unusable or unrecognised digests
    if not digest or '$' not in digest:
        return False
    return check_password(secret, digest)
