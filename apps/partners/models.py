from django.db import models
import uuid


class Partner(models.Model):
    """
    Co-owner of company equipment.

    Partners have their own lifecycle. Their shares live in
    ``equipment.EquipmentPartner`` and go away with the partner.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company = models.ForeignKey('companies.Company', on_delete=models.CASCADE, related_name='partners')
    name = models.CharField(max_length=200)
    phone = models.CharField(max_length=50, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'partners'
        ordering = ['name']
        constraints = [
            models.UniqueConstraint(fields=['company', 'name'], name='unique_partner_name_per_company'),
        ]

    def __str__(self):
        return self.name
