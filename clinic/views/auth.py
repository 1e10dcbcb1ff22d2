"""
Authentication endpoints.

Login answers with both a DRF token (``Authorization: Token <key>``) and
a JWT pair so either header style works against the API.  Registration
is open but can only create doctor and nurse accounts; administrators are
created with ``createsuperuser`` or ``ensure_test_users``.
"""
from __future__ import annotations

from django.contrib.auth import authenticate
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken, OutstandingToken
from rest_framework_simplejwt.tokens import RefreshToken

from clinic.models import User
from clinic.serializers.auth import LoginSerializer, LogoutSerializer, RegisterSerializer
from clinic.services.audit import log_action


def user_payload(user: User) -> dict:
    return {
        'id': user.id,
        'username': user.username,
        'name': user.get_full_name() or user.username,
        'email': user.email,
        'role': user.role,
    }


def token_payload(user: User) -> dict:
    token_obj, _ = Token.objects.get_or_create(user=user)
    refresh = RefreshToken.for_user(user)
    return {
        'ok': True,
        'token': token_obj.key,
        'jwt_access': str(refresh.access_token),
        'jwt_refresh': str(refresh),
        'role': user.role,
        'user': user_payload(user),
    }


def _resolve_username(account: str) -> str:
    if '@' in account:
        user = User.objects.filter(email__iexact=account).only('username').first()
        if user:
            return user.username
    return account


@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    """
    Login with username or email and password.
    Accepts fields: username | email, password.
    """
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    account = s.validated_data['account']
    ip = request.META.get('REMOTE_ADDR')

    user = authenticate(request, username=_resolve_username(account), password=s.validated_data['password'])
    if not user:
        log_action(user=None, action='login', object_type='user',
                   detail={'result': 'fail', 'account': account, 'ip': ip})
        return Response({'ok': False, 'error': {'code': 'invalid_credentials', 'message': 'Invalid credentials'}},
                        status=status.HTTP_401_UNAUTHORIZED)

    log_action(user=user, action='login', object_type='user', object_id=user.id,
               detail={'result': 'ok', 'ip': ip})
    return Response(token_payload(user))

# ScopedRateThrottle reads throttle_scope from the view class api_view generated
login_view.cls.throttle_scope = 'login'


@api_view(['POST'])
@permission_classes([AllowAny])
def register_view(request):
    s = RegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    first, _, last = vd['name'].strip().partition(' ')
    user = User.objects.create_user(
        username=vd['email'],
        email=vd['email'],
        password=vd['password'],
        first_name=first,
        last_name=last,
        role=vd['role'],
    )
    log_action(user=user, action='register', object_type='user', object_id=user.id,
               detail={'role': user.role, 'ip': request.META.get('REMOTE_ADDR')})
    return Response(token_payload(user), status=status.HTTP_201_CREATED)

register_view.cls.throttle_scope = 'register'


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def profile_view(request):
    return Response({'ok': True, 'user': user_payload(request.user)})


@api_view(['POST'])
@permission_classes([AllowAny])
def jwt_refresh_view(request):
    """Return a new access token from a refresh token (``refresh`` or ``jwt_refresh``)."""
    refresh = request.data.get('refresh') or request.data.get('jwt_refresh')
    s = TokenRefreshSerializer(data={'refresh': refresh})
    try:
        s.is_valid(raise_exception=True)
    except TokenError as e:
        raise InvalidToken(e.args[0])
    data = dict(s.validated_data)
    payload = {'ok': True, 'jwt_access': data.pop('access')}
    if 'refresh' in data:
        payload['jwt_refresh'] = data['refresh']
    return Response(payload)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def jwt_logout_view(request):
    """Blacklist the given refresh token, or every outstanding one of the user."""
    s = LogoutSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    refresh = s.validated_data.get('refresh')
    if refresh:
        try:
            token = RefreshToken(refresh)
        except TokenError as e:
            raise InvalidToken(e.args[0])
        if token.get('user_id') != str(request.user.pk) and token.get('user_id') != request.user.pk:
            return Response({'ok': False, 'error': {'code': 'permission_denied',
                                                    'message': 'Token belongs to another user'}},
                            status=status.HTTP_403_FORBIDDEN)
        token.blacklist()
        count = 1
    else:
        count = 0
        for outstanding in OutstandingToken.objects.filter(user=request.user):
            _, created = BlacklistedToken.objects.get_or_create(token=outstanding)
            count += int(created)
    log_action(user=request.user, action='logout', object_type='user', object_id=request.user.id,
               detail={'blacklisted': count})
    return Response({'ok': True, 'blacklisted': count})
