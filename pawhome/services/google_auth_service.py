# pawhome/services/google_auth_service.py

import logging
from typing import Any, Dict, Optional

import requests
from google.auth import exceptions as google_exceptions
from google.auth.transport.requests import Request as GoogleAuthRequest
from google.oauth2 import id_token as google_id_token
from google_auth_oauthlib.flow import Flow
from oauthlib.oauth2.rfc6749.errors import OAuth2Error


class GoogleAuthError(Exception):
    """Google이 전달받은 인증 정보를 확인해 주지 못했을 때 발생합니다."""


class GoogleAuthService:
    """
    Google 로그인 인증 정보를 검증하고 사용자 프로필을 가져오는 서비스 클래스입니다.
    클라이언트는 ID Token, Access Token, 인증 코드 중 하나를 보낼 수 있으며
    어느 경우든 {'sub', 'email', 'name', 'picture'} 형태의 프로필을 반환합니다.
    """
    _user_info_url = "https://www.googleapis.com/oauth2/v3/userinfo"
    _scopes = [
        "https://www.googleapis.com/auth/userinfo.profile",
        "https://www.googleapis.com/auth/userinfo.email",
        "openid"
    ]

    def __init__(self, client_id: Optional[str] = None, client_secrets_path: Optional[str] = None,
                 redirect_uri: str = 'postmessage', timeout: float = 10.0):
        self.client_id = client_id
        self.client_secrets_path = client_secrets_path
        self.redirect_uri = redirect_uri
        self.timeout = timeout

    def verify_id_token(self, token: str) -> Dict[str, Any]:
        """ID Token의 서명, 만료, audience(client_id)를 검증합니다."""
        if not self.client_id:
            raise GoogleAuthError("GOOGLE_CLIENT_ID is not configured.")
        return google_id_token.verify_oauth2_token(token, GoogleAuthRequest(), self.client_id)

    def fetch_user_info(self, access_token: str) -> Dict[str, Any]:
        response = requests.get(
            self._user_info_url,
            headers={"Authorization": f"Bearer {access_token}"},
            timeout=self.timeout
        )
        response.raise_for_status()
        return response.json()

    def exchange_code_for_user_info(self, auth_code: str) -> Dict[str, Any]:
        """인증 코드를 Access Token으로 교환하고, 이를 사용해 사용자 정보를 가져옵니다."""
        if not self.client_secrets_path:
            raise GoogleAuthError("GOOGLE_CLIENT_SECRETS_PATH is not configured.")

        flow = Flow.from_client_secrets_file(self.client_secrets_path, scopes=self._scopes)
        flow.redirect_uri = self.redirect_uri
        flow.fetch_token(code=auth_code)
        return self.fetch_user_info(flow.credentials.token)

    def resolve_profile(self, id_token: Optional[str] = None, access_token: Optional[str] = None,
                        auth_code: Optional[str] = None) -> Dict[str, Any]:
        """전달된 인증 정보 중 하나로 Google 프로필을 확인합니다. ID Token이 가장 우선합니다."""
        try:
            if id_token:
                claims = self.verify_id_token(id_token)
            elif access_token:
                claims = self.fetch_user_info(access_token)
            elif auth_code:
                claims = self.exchange_code_for_user_info(auth_code)
            else:
                raise GoogleAuthError("No Google credential supplied.")
        except GoogleAuthError:
            raise
        except (ValueError, requests.RequestException, google_exceptions.GoogleAuthError, OAuth2Error) as e:
            logging.warning(f"Google credential verification failed: {e}")
            raise GoogleAuthError(str(e)) from e

        return {
            'sub': claims.get('sub'),
            'email': claims.get('email'),
            'name': claims.get('name'),
            'picture': claims.get('picture'),
        }
