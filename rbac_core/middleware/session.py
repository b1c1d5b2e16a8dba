# rbac_core/middleware/session.py
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from rbac_core.config import AUTH_HEADER


@dataclass(frozen=True)
class AuthSession:
    """외부 인증 시스템이 확인한 세션. 권한 판단에 필요한 것은 user_id뿐입니다."""
    user_id: str
    token: Optional[str] = None
    claims: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AuthContext:
    """보호된 핸들러에 전달되는 인증 결과"""
    user_id: str
    session: AuthSession


class ISessionResolver(ABC):
    @abstractmethod
    def resolve(self, request: Any) -> Optional[AuthSession]:
        """요청에서 인증된 세션을 찾아 반환합니다. 없거나 유효하지 않으면 None."""
        pass


class TokenHeaderSessionResolver(ISessionResolver):
    """
    요청 헤더의 불투명 토큰을 사용자 ID로 바꿔 세션을 만듭니다.

    토큰 발급과 검증은 외부 인증 시스템의 책임이며, 여기서는 주입받은
    token_lookup(token) -> user_id | None 함수만 호출합니다.
    """

    def __init__(self, token_lookup: Callable[[str], Optional[str]], header: str = AUTH_HEADER):
        self.token_lookup = token_lookup
        self.header = header
        self._environ_key = "HTTP_" + header.upper().replace("-", "_")

    def resolve(self, request: Any) -> Optional[AuthSession]:
        token = self._read_token(request)
        if not token:
            return None
        user_id = self.token_lookup(token)
        if not user_id:
            return None
        return AuthSession(user_id=str(user_id), token=token)

    def _read_token(self, request: Any) -> Optional[str]:
        # WSGI environ은 dict, 그 밖의 요청 객체는 headers 매핑을 가집니다.
        if isinstance(request, dict):
            return request.get(self._environ_key)
        headers = getattr(request, "headers", None)
        if headers is None:
            return None
        return headers.get(self.header)
