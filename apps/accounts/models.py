from django.conf import settings
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
import uuid


class UserManager(BaseUserManager):
    """Custom user manager for email-based authentication."""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')

        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', User.Role.ADMIN)
        extra_fields.setdefault('is_super_admin', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """Back-office user; the role decides which surface the account can use."""

    class Role(models.TextChoices):
        ADMIN = 'admin', 'Admin'
        RETAILER = 'retailer', 'Retailer'
        AGENT = 'agent', 'Agent'
        TERMINAL = 'terminal', 'Terminal'

    class Status(models.TextChoices):
        ACTIVE = 'active', 'Active'
        INACTIVE = 'inactive', 'Inactive'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255, db_index=True)
    full_name = models.CharField(max_length=150, blank=True)
    phone = models.CharField(max_length=30, blank=True)

    role = models.CharField(max_length=20, choices=Role.choices, default=Role.RETAILER)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.ACTIVE)
    is_super_admin = models.BooleanField(default=False)

    # Password reset
    reset_token = models.CharField(max_length=64, blank=True, null=True)

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    last_login = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'users'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['email'], name='users_email_4b85f2_idx'),
            models.Index(fields=['role', 'status'], name='users_role_0c2a4e_idx'),
        ]

    def __str__(self):
        return self.email

    def get_display_name(self):
        """Return full name or email prefix."""
        return self.full_name or self.email.split('@')[0]

    @property
    def is_admin(self):
        return self.role == self.Role.ADMIN


class PermissionKey(models.TextChoices):
    """Fine-grained capabilities grantable to non-super admins."""

    MANAGE_RETAILERS = 'manage_retailers', 'Manage Retailers'
    MANAGE_AGENTS = 'manage_agents', 'Manage Agents'
    MANAGE_TERMINALS = 'manage_terminals', 'Manage Terminals'
    MANAGE_ADMINS = 'manage_admins', 'Manage Admins'
    RESET_PASSWORDS = 'reset_passwords', 'Reset Passwords'
    MANAGE_DEPOSITS = 'manage_deposits', 'Manage Deposits'
    MANAGE_CREDIT_LIMITS = 'manage_credit_limits', 'Manage Credit Limits'
    VIEW_FINANCIAL_DATA = 'view_financial_data', 'View Financial Data'
    MANAGE_VOUCHERS = 'manage_vouchers', 'Manage Vouchers'
    MANAGE_COMMISSION_GROUPS = 'manage_commission_groups', 'Manage Commission Groups'
    VIEW_REPORTS = 'view_reports', 'View Reports'
    MANAGE_SETTINGS = 'manage_settings', 'Manage Settings'
    VIEW_DASHBOARD = 'view_dashboard', 'View Dashboard'


PERMISSION_DESCRIPTIONS = {
    PermissionKey.VIEW_DASHBOARD: 'Access the admin dashboard',
    PermissionKey.MANAGE_RETAILERS: 'Create, edit, and delete retailer accounts',
    PermissionKey.MANAGE_AGENTS: 'Create, edit, and delete agent accounts',
    PermissionKey.MANAGE_TERMINALS: 'Create, edit, and delete terminal accounts',
    PermissionKey.MANAGE_ADMINS: 'Create and manage other admin users',
    PermissionKey.RESET_PASSWORDS: 'Reset passwords for users',
    PermissionKey.MANAGE_DEPOSITS: 'Add deposits to retailer accounts',
    PermissionKey.MANAGE_CREDIT_LIMITS: 'Adjust credit limits and balances',
    PermissionKey.VIEW_FINANCIAL_DATA: 'View balance and financial information',
    PermissionKey.MANAGE_VOUCHERS: 'Upload and manage voucher inventory',
    PermissionKey.MANAGE_COMMISSION_GROUPS: 'Create and edit commission structures',
    PermissionKey.VIEW_REPORTS: 'Access the reports section',
    PermissionKey.MANAGE_SETTINGS: 'Access and modify system settings',
}

PERMISSION_CATEGORIES = {
    'Dashboard': [PermissionKey.VIEW_DASHBOARD],
    'User Management': [
        PermissionKey.MANAGE_RETAILERS,
        PermissionKey.MANAGE_AGENTS,
        PermissionKey.MANAGE_TERMINALS,
        PermissionKey.MANAGE_ADMINS,
        PermissionKey.RESET_PASSWORDS,
    ],
    'Financial Operations': [
        PermissionKey.MANAGE_DEPOSITS,
        PermissionKey.MANAGE_CREDIT_LIMITS,
        PermissionKey.VIEW_FINANCIAL_DATA,
    ],
    'Inventory & Products': [
        PermissionKey.MANAGE_VOUCHERS,
        PermissionKey.MANAGE_COMMISSION_GROUPS,
    ],
    'Reports & Settings': [
        PermissionKey.VIEW_REPORTS,
        PermissionKey.MANAGE_SETTINGS,
    ],
}


class AdminPermission(models.Model):
    """One granted capability for one admin."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    admin = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='admin_permissions',
    )
    permission_key = models.CharField(max_length=50, choices=PermissionKey.choices)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'admin_permissions'
        ordering = ['permission_key']
        constraints = [
            models.UniqueConstraint(
                fields=['admin', 'permission_key'],
                name='unique_admin_permission',
            ),
        ]

    def __str__(self):
        return f"{self.admin.email}: {self.permission_key}"
