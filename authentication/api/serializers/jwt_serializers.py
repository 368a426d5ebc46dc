from rest_framework_simplejwt.tokens import RefreshToken


class CustomRefreshToken(RefreshToken):
    """Refresh token that also carries the user's role.

    The role claim is informational for clients; the API re-reads the role
    from the database on every request.
    """

    @classmethod
    def for_user(cls, user):
        token = super().for_user(user)

        token["role"] = user.role
        token["is_seller"] = user.is_seller()
        token["is_admin"] = user.is_admin()

        return token
