import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models

from authentication.domain.identity import Role


class CustomUser(AbstractUser):
    ROLE_CHOICES = Role.choices()

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    date_joined = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=Role.BUYER.value)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["username"]

    class Meta:
        app_label = "authentication"
        ordering = ["-date_joined"]

    def is_seller(self):
        """Check if user is a seller"""
        return self.role == Role.SELLER.value

    def is_admin(self):
        """Check if user is an admin"""
        return self.role == Role.ADMIN.value or self.is_superuser

    def __str__(self):
        return self.email
