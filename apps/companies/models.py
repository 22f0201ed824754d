from django.db import models
import uuid


class CompanyRole(models.TextChoices):
    OWNER = 'owner', 'Owner'
    MEMBER = 'member', 'Member'


class Company(models.Model):
    """Tenant. Every business row belongs to exactly one company."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'companies'
        ordering = ['name']
        verbose_name_plural = 'companies'

    def __str__(self):
        return self.name

    def has_member(self, user):
        return self.members.filter(user=user).exists()

    def get_user_role(self, user):
        try:
            return self.members.get(user=user).role
        except CompanyMember.DoesNotExist:
            return None

    def is_owner(self, user):
        return self.get_user_role(user) == CompanyRole.OWNER


class CompanyMember(models.Model):
    """User membership in a company with role."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company = models.ForeignKey(Company, on_delete=models.CASCADE, related_name='members')
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='company_memberships')
    role = models.CharField(max_length=20, choices=CompanyRole.choices, default=CompanyRole.MEMBER)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'company_members'
        constraints = [
            models.UniqueConstraint(fields=['company', 'user'], name='unique_company_member'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.user} in {self.company.name} ({self.role})"
