# ABOUTME: Confirmation token generation and well-formedness checks.
# ABOUTME: Tokens are 25 alphanumeric characters drawn from a CSPRNG.

import secrets
import string

from newsletter_desk.models import contains_forbidden_characters, grapheme_count

TOKEN_LENGTH = 25
TOKEN_ALPHABET = string.ascii_letters + string.digits


def generate_subscription_token() -> str:
    """Generate a random, case-sensitive alphanumeric confirmation token.

    Uniqueness is probabilistic (62**25 possibilities) and not checked here;
    the token column's primary key rejects the astronomically unlikely collision.
    """
    return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(TOKEN_LENGTH))


def token_is_valid(token: str) -> bool:
    """Check that a token could have been issued, without touching the store.

    A token is rejected when it is blank, is not exactly 25 grapheme clusters
    long, or contains any of / ( ) " < > \\ { }.
    """
    if not token.strip():
        return False
    if grapheme_count(token) != TOKEN_LENGTH:
        return False
    return not contains_forbidden_characters(token)
