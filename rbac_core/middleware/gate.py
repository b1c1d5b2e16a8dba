# rbac_core/middleware/gate.py
"""
요청 핸들러를 인증/권한 검사로 감싸는 보호 어댑터입니다.

핸들러 호출 규약은 등록 시점에 명시적으로 고릅니다.

- PairedGate: WSGI 규약 app(environ, start_response). 거부 시 start_response로 직접 응답합니다.
- ContextualGate: handler(request, context=None) 규약. 거부 시 DeniedResponse 값을 반환합니다.

사용 예시:
    gate = for_contextual_handler(resolver, lambda request: authorization_service)
    list_roles = gate.with_permission(Permission.ROLES_VIEW, list_roles_handler)
"""
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import wraps
from http import HTTPStatus
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from rbac_core.middleware.session import AuthContext, ISessionResolver
from rbac_core.services.authorization_service import AuthorizationService
from rbac_core.services.catalog import PermissionLike, permission_names
from rbac_core.services.exceptions import AuthorizationStoreError, ForbiddenError, UnauthenticatedError

logger = logging.getLogger(__name__)

AUTH_ENVIRON_KEY = "rbac.auth"

AuthorizerProvider = Callable[[Any], AuthorizationService]


@dataclass(frozen=True)
class DeniedResponse:
    """인증/권한 검사 실패 시 반환되는 구조화된 오류 값"""
    status: int
    error: str
    message: str
    required_permissions: Tuple[str, ...] = ()

    @property
    def status_line(self) -> str:
        return f"{self.status} {self.error}"

    @property
    def body(self) -> Dict[str, Any]:
        body = {"error": self.error, "message": self.message}
        if self.required_permissions:
            body["required_permissions"] = list(self.required_permissions)
        return body


class AuthorizationGate(ABC):
    error_map = {
        UnauthenticatedError: HTTPStatus.UNAUTHORIZED,
        ForbiddenError: HTTPStatus.FORBIDDEN,
        AuthorizationStoreError: HTTPStatus.SERVICE_UNAVAILABLE,
    }

    def __init__(self, session_resolver: ISessionResolver, authorizer_provider: AuthorizerProvider):
        """
        Args:
            session_resolver: 요청에서 인증된 세션을 찾는 객체.
            authorizer_provider: 요청마다 사용할 AuthorizationService를 돌려주는 함수.
        """
        self.session_resolver = session_resolver
        self.authorizer_provider = authorizer_provider

    def require_auth(self, request: Any) -> AuthContext:
        """
        Raises:
            UnauthenticatedError: 세션 또는 사용자 ID를 확인할 수 없을 때.
        """
        session = self.session_resolver.resolve(request)
        if session is None or not session.user_id:
            raise UnauthenticatedError("You must be logged in")
        return AuthContext(user_id=session.user_id, session=session)

    def require_permission(self, request: Any, permissions: Union[PermissionLike, Iterable[PermissionLike]]) -> AuthContext:
        """
        인증을 확인한 뒤, 요구 권한 중 하나라도 있는지 검사합니다.
        관리자(admin) 역할의 사용자는 권한 검사를 건너뜁니다.

        Raises:
            UnauthenticatedError: 인증되지 않았을 때.
            ForbiddenError: 요구 권한을 하나도 가지고 있지 않을 때.
            AuthorizationStoreError: 저장소 조회 실패로 판단할 수 없을 때.
        """
        required = _normalize_permissions(permissions)
        auth = self.require_auth(request)
        authorizer = self.authorizer_provider(request)

        if authorizer.is_admin(auth.user_id):
            return auth
        if not authorizer.has_any_permission(auth.user_id, required):
            raise ForbiddenError(required)
        return auth

    def with_auth(self, handler: Callable) -> Callable:
        return self._wrap(handler, None)

    def with_permission(self, permission: Union[PermissionLike, Iterable[PermissionLike]], handler: Callable) -> Callable:
        return self._wrap(handler, _normalize_permissions(permission))

    def _authorize(self, request: Any, required: Optional[List[str]]) -> AuthContext:
        if required is None:
            return self.require_auth(request)
        return self.require_permission(request, required)

    def _status_for(self, error: Exception) -> HTTPStatus:
        for error_type, status in self.error_map.items():
            if isinstance(error, error_type):
                return status
        raise error

    def _deny(self, error: Exception) -> DeniedResponse:
        status = self._status_for(error)
        if isinstance(error, AuthorizationStoreError):
            logger.warning("Authorization could not be determined: %s", error)
            return DeniedResponse(status.value, status.phrase, "Authorization could not be determined")

        required = tuple(getattr(error, "required_permissions", ()))
        logger.info("Request denied (%d): %s", status.value, error)
        return DeniedResponse(status.value, status.phrase, str(error), required)

    @abstractmethod
    def _wrap(self, handler: Callable, required: Optional[List[str]]) -> Callable:
        pass


_DENIAL_ERRORS = tuple(AuthorizationGate.error_map)


class PairedGate(AuthorizationGate):
    """WSGI 애플리케이션 app(environ, start_response)을 보호합니다."""

    def _wrap(self, app: Callable, required: Optional[List[str]]) -> Callable:
        @wraps(app)
        def protected_app(environ, start_response):
            try:
                auth = self._authorize(environ, required)
            except _DENIAL_ERRORS as e:
                denied = self._deny(e)
                start_response(denied.status_line, [("Content-Type", "application/json")])
                return [json.dumps(denied.body).encode("utf-8")]

            environ[AUTH_ENVIRON_KEY] = auth
            return app(environ, start_response)
        return protected_app


class ContextualGate(AuthorizationGate):
    """handler(request, context=None) 형태의 핸들러를 보호합니다."""

    def _wrap(self, handler: Callable, required: Optional[List[str]]) -> Callable:
        @wraps(handler)
        def protected_handler(request, context=None):
            try:
                auth = self._authorize(request, required)
            except _DENIAL_ERRORS as e:
                return self._deny(e)

            enriched = dict(context or {})
            enriched.update(user_id=auth.user_id, session=auth.session)
            return handler(request, enriched)
        return protected_handler


def for_paired_handler(session_resolver: ISessionResolver, authorizer_provider: AuthorizerProvider) -> PairedGate:
    return PairedGate(session_resolver, authorizer_provider)


def for_contextual_handler(session_resolver: ISessionResolver, authorizer_provider: AuthorizerProvider) -> ContextualGate:
    return ContextualGate(session_resolver, authorizer_provider)


def _normalize_permissions(permissions: Union[PermissionLike, Iterable[PermissionLike]]) -> List[str]:
    names = permission_names(permissions)
    if not names:
        raise ValueError("At least one permission is required.")
    return names
