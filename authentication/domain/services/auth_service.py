"""
AuthService - Core Authentication Business Logic.

Signup and login for the marketplace. Kept free of HTTP concerns so the views
stay thin and the flows can be tested without a client.
"""

import logging
import time

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from authentication.api.serializers.jwt_serializers import CustomRefreshToken
from authentication.domain.identity import Role
from authentication.infra.observability.metrics import login_duration, login_failed, login_total, signup_total
from utils.logging_utils import mask_value

from .results import AuthErrorCodes, LoginResult, RegisterResult


User = get_user_model()
logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


class AuthService:
    """
    Authentication service encapsulating signup and login.

    Both flows end with a JWT access/refresh pair for the user.
    """

    def signup(self, email: str, password: str, username: str) -> RegisterResult:
        """
        Register a new buyer account.

        Business Logic:
        1. Email (case-insensitive) and username must be unused
        2. The account is created with the buyer role and logged in

        Field presence and email format are checked by SignupSerializer.

        Returns:
            RegisterResult with the created user and its tokens
        """
        try:
            if User.objects.filter(email__iexact=email).exists() or User.objects.filter(username=username).exists():
                logger.info(f"Signup rejected for existing account {mask_value(email)}")
                signup_total.labels(status="failed").inc()
                return RegisterResult(success=False, error="User already exists", error_code=AuthErrorCodes.CONFLICT)

            with transaction.atomic():
                user = User.objects.create_user(
                    username=username, email=email, password=password, role=Role.BUYER.value
                )
        except IntegrityError:
            signup_total.labels(status="failed").inc()
            return RegisterResult(success=False, error="User already exists", error_code=AuthErrorCodes.CONFLICT)
        except Exception as e:
            logger.exception(f"Signup error for email {mask_value(email)}: {e}")
            signup_total.labels(status="failed").inc()
            return RegisterResult(
                success=False, error=UNEXPECTED_ERROR_MESSAGE, error_code=AuthErrorCodes.INTERNAL_ERROR
            )

        signup_total.labels(status="success").inc()
        logger.info(f"User {user.id} signed up as {user.role}")

        refresh = CustomRefreshToken.for_user(user)
        return RegisterResult(
            success=True,
            user=user,
            access_token=str(refresh.access_token),
            refresh_token=str(refresh),
            message="Signup successful",
        )

    def login(self, email: str, password: str) -> LoginResult:
        """
        Authenticate user with email/password.

        Unknown email, wrong password and inactive accounts all produce the same
        ``invalid_credentials`` answer.
        """
        start = time.time()
        try:
            user = User.objects.filter(email__iexact=email).first()
            if user is None:
                return self._reject(email, "user_not_found")

            if not user.check_password(password):
                return self._reject(email, "wrong_password")

            if not user.is_active:
                return self._reject(email, "inactive")

            return self._generate_login_tokens(user)

        except Exception as e:
            logger.exception(f"Login error for email {mask_value(email)}: {e}")
            login_total.labels(status="failed").inc()
            return LoginResult(success=False, error=UNEXPECTED_ERROR_MESSAGE, error_code=AuthErrorCodes.INTERNAL_ERROR)
        finally:
            login_duration.observe(time.time() - start)

    def _reject(self, email: str, reason: str) -> LoginResult:
        logger.info(f"Login failed for {mask_value(email)}: {reason}")
        login_failed.labels(reason=reason).inc()
        login_total.labels(status="failed").inc()
        return LoginResult(success=False, error="Invalid credentials", error_code=AuthErrorCodes.INVALID_CREDENTIALS)

    def _generate_login_tokens(self, user) -> LoginResult:
        """Generate JWT tokens for successful login."""
        refresh = CustomRefreshToken.for_user(user)
        login_total.labels(status="success").inc()
        return LoginResult(
            success=True,
            user=user,
            access_token=str(refresh.access_token),
            refresh_token=str(refresh),
            message="Login successful",
        )
