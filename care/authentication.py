"""
Bearer token authentication for the RPC endpoints.

Kept apart from the views so that DRF can import it from settings while
initialising without pulling in view modules.
"""
from __future__ import annotations

from django.conf import settings
from rest_framework import authentication

from care.exceptions import MalformedToken
from care.services.tokens import authenticate_token


class BearerTokenAuthentication(authentication.BaseAuthentication):
    """Accept ``Authorization: Bearer <token>`` carrying a signed session token.

    Requests without the header stay anonymous so that permission classes
    decide; a header that is present but wrong fails with 401.
    """

    keyword = settings.CLINIC_AUTH.get('AUTH_HEADER_KEYWORD', 'Bearer')

    def authenticate(self, request):
        auth = authentication.get_authorization_header(request).split()
        if not auth or auth[0].lower() != self.keyword.lower().encode():
            return None
        if len(auth) != 2:
            raise MalformedToken()
        try:
            token = auth[1].decode()
        except UnicodeError as e:
            raise MalformedToken() from e
        user = authenticate_token(token)
        return user, token

    def authenticate_header(self, request):
        return self.keyword


class BearerChallengeOnly(BearerTokenAuthentication):
    """Never authenticates, but still answers failures with a Bearer challenge.

    Used by the public login and token check procedures so that their
    credential errors come back as 401 rather than 403.
    """

    def authenticate(self, request):
        return None
