from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from .models import CustomUser


@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    list_display = ('email', 'username', 'role', 'is_active', 'is_superuser', 'date_joined')
    list_filter = ('role', 'is_active', 'is_superuser')
    search_fields = ('email', 'username')
    ordering = ('-date_joined',)
    readonly_fields = ('date_joined', 'updated_at', 'last_login')

    fieldsets = (
        (None, {
            'fields': ('email', 'username', 'password')
        }),
        ('Role', {
            'fields': ('role',)
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser'),
            'classes': ('collapse',)
        }),
        ('Timestamps', {
            'fields': ('date_joined', 'updated_at', 'last_login'),
            'classes': ('collapse',)
        })
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'username', 'role', 'password1', 'password2'),
        }),
    )
